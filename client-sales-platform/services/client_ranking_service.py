"""
Client ranking service ("top client" statistics).

Three read-only rankings over the full sale set:
- highest total sale value (single winner or None)
- highest average sale value (single winner or None)
- most distinct sale days (every client tied at the maximum)

Winners are chosen on full-precision aggregates; monetary results are
rounded to cents afterwards, for presentation only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from domain.client import ClientSummary
from domain.sale import round_currency
from repositories.client_repository import get_client_by_id, get_client_summaries
from repositories.sales_analytics_repository import (
    SaleAggregate,
    aggregate_sales_by_client,
    count_unique_sale_days_by_client,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TopClientByTotalSales:
    id: UUID
    name: str
    email: str
    total_sales_value: Decimal

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "totalSalesValue": float(self.total_sales_value),
        }


@dataclass(frozen=True, slots=True)
class TopClientByAverageSale:
    id: UUID
    name: str
    email: str
    average_sale_value: Decimal

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "averageSaleValue": float(self.average_sale_value),
        }


@dataclass(frozen=True, slots=True)
class FrequentClient:
    id: UUID
    name: str
    email: str
    unique_sale_days: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "uniqueSaleDays": self.unique_sale_days,
        }


def _top_client(metric: SaleAggregate) -> Optional[tuple[ClientSummary, Decimal]]:
    """
    Winner of a single-winner ranking, or None when there is nothing to rank.

    If several clients share the maximum, the first row the aggregate query
    returns wins.
    """

    groups = aggregate_sales_by_client(metric, limit=1)
    if not groups:
        return None

    winner = groups[0]
    if winner.value is None:
        return None

    client = get_client_by_id(winner.client_id)
    if client is None:
        logger.warning(
            "Top client %s by %s no longer exists; returning no winner",
            winner.client_id,
            metric.value,
        )
        return None

    return client.summary(), round_currency(winner.value)


def get_top_client_by_total_sales() -> Optional[TopClientByTotalSales]:
    """
    Client with the highest sum of sale values.

    Returns:
        TopClientByTotalSales (value rounded to 2 places) or None if there are no sales

    Example:
        top = get_top_client_by_total_sales()
        if top:
            print(f"{top.name}: {top.total_sales_value}")
    """

    result = _top_client(SaleAggregate.TOTAL)
    if result is None:
        return None

    client, total = result
    return TopClientByTotalSales(
        id=client.id,
        name=client.name,
        email=client.email,
        total_sales_value=total,
    )


def get_top_client_by_average_sale_value() -> Optional[TopClientByAverageSale]:
    """
    Client with the highest average sale value.

    Returns:
        TopClientByAverageSale (value rounded to 2 places) or None if there are no sales
    """

    result = _top_client(SaleAggregate.AVERAGE)
    if result is None:
        return None

    client, average = result
    return TopClientByAverageSale(
        id=client.id,
        name=client.name,
        email=client.email,
        average_sale_value=average,
    )


def get_top_clients_by_purchase_frequency() -> List[FrequentClient]:
    """
    Clients with the most distinct sale days.

    A day counts once no matter how many sales happened on it. Every client
    tied at the maximum is returned.

    Returns:
        List of FrequentClient (empty if there are no sales)
    """

    day_counts = count_unique_sale_days_by_client()
    if not day_counts:
        return []

    max_days = max(row.unique_sale_days for row in day_counts)
    winner_ids = [row.client_id for row in day_counts if row.unique_sale_days == max_days]

    summaries = {summary.id: summary for summary in get_client_summaries(winner_ids)}

    winners: List[FrequentClient] = []
    for client_id in winner_ids:
        summary = summaries.get(client_id)
        if summary is None:
            logger.warning("Frequent client %s no longer exists; skipping", client_id)
            continue
        winners.append(FrequentClient(
            id=summary.id,
            name=summary.name,
            email=summary.email,
            unique_sale_days=max_days,
        ))

    return winners


__all__ = [
    "TopClientByTotalSales",
    "TopClientByAverageSale",
    "FrequentClient",
    "get_top_client_by_total_sales",
    "get_top_client_by_average_sale_value",
    "get_top_clients_by_purchase_frequency",
]
