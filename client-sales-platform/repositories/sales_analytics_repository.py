"""
Sales analytics repository (grouped aggregates).

Grouping runs inside PostgreSQL through the functions defined in
`sql/analytics_functions.sql`, invoked with `supabase.rpc(...)`. Nothing here
scans individual sale rows in Python.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.time import parse_date, require_utc_timestamp
from repositories.client import get_supabase
from repositories.errors import rows_or_raise, translate_store_errors


class SaleAggregate(str, Enum):
    """Per-client aggregate over sale values."""

    TOTAL = "sum"
    AVERAGE = "avg"


@dataclass(frozen=True, slots=True)
class ClientAggregate:
    """Full-precision aggregate for one client. `value` is None for an empty group."""

    client_id: UUID
    value: Optional[Decimal]


@dataclass(frozen=True, slots=True)
class ClientSaleDays:
    """Number of distinct calendar days on which a client bought something."""

    client_id: UUID
    unique_sale_days: int


@dataclass(frozen=True, slots=True)
class DailySaleCount:
    day: date
    total: int


def _rpc_rows(function: str, params: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    with translate_store_errors(f"run {function}"):
        response = get_supabase().rpc(function, dict(params)).execute()
    return rows_or_raise(response, f"run {function}")


def aggregate_sales_by_client(metric: SaleAggregate, limit: int = 1) -> List[ClientAggregate]:
    """
    Group sales by client and aggregate their values.

    Args:
        metric: SUM or AVG of sale values
        limit: Keep only the top-N groups by aggregate (descending)

    Returns:
        Up to `limit` ClientAggregate rows, highest aggregate first. Ties keep
        whatever order the database produced.
    """

    rows = _rpc_rows(
        "aggregate_sales_by_client",
        {"p_metric": metric.value, "p_limit": limit},
    )

    return [
        ClientAggregate(
            client_id=UUID(str(row["client_id"])),
            value=Decimal(str(row["value"])) if row.get("value") is not None else None,
        )
        for row in rows
    ]


def count_unique_sale_days_by_client() -> List[ClientSaleDays]:
    """
    Count distinct sale days per client.

    Returns:
        One row per client with at least one sale, most active first
    """

    rows = _rpc_rows("count_unique_sale_days_by_client", {})

    return [
        ClientSaleDays(
            client_id=UUID(str(row["client_id"])),
            unique_sale_days=int(row["unique_sale_days"]),
        )
        for row in rows
    ]


def count_sales_per_day(
    gte: Optional[datetime] = None,
    lt: Optional[datetime] = None,
) -> List[DailySaleCount]:
    """
    Count sales per calendar day within `[gte, lt)`.

    Either bound may be None (open). Days without sales are absent.

    Returns:
        DailySaleCount rows in ascending day order
    """

    if gte is not None:
        require_utc_timestamp("gte", gte)
    if lt is not None:
        require_utc_timestamp("lt", lt)

    rows = _rpc_rows(
        "count_sales_per_day",
        {
            "p_gte": gte.isoformat() if gte is not None else None,
            "p_lt": lt.isoformat() if lt is not None else None,
        },
    )

    return [DailySaleCount(day=parse_date(row["day"]), total=int(row["total"])) for row in rows]


__all__ = [
    "SaleAggregate",
    "ClientAggregate",
    "ClientSaleDays",
    "DailySaleCount",
    "aggregate_sales_by_client",
    "count_unique_sale_days_by_client",
    "count_sales_per_day",
]
