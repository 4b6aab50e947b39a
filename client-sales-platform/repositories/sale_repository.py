"""
Sale repository (persistence).

This module provides *only* persistence operations for the Sale domain
entity. It does not enforce business rules (value validation, client
existence); services do that before calling in here.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, List, Mapping, Optional
from uuid import UUID

from domain.client import ClientSummary
from domain.sale import Sale
from domain.time import parse_utc_datetime, require_utc_timestamp
from repositories.client import get_supabase
from repositories.errors import rows_or_raise, translate_store_errors

# Supabase table name for sale records.
# Keep this aligned with your database schema.
_SALES_TABLE: str = "sales"

_SALE_COLUMNS: str = "id, value, sale_date, client_id"
_SALE_WITH_CLIENT_COLUMNS: str = f"{_SALE_COLUMNS}, client:clients(id, name, email)"


def _to_iso_utc(dt: datetime, *, name: str) -> str:
    """Serialize a UTC datetime to ISO-8601 (timezone-aware, offset 0)."""

    require_utc_timestamp(name, dt)
    return dt.astimezone(timezone.utc).isoformat()


def row_to_sale(row: Mapping[str, Any]) -> Sale:
    """Convert a Supabase row (optionally with an embedded client) into a Sale."""

    client_row = row.get("client")
    client = None
    if client_row:
        client = ClientSummary(
            id=UUID(str(client_row["id"])),
            name=str(client_row["name"]),
            email=str(client_row["email"]),
        )

    return Sale(
        id=int(row["id"]),
        value=Decimal(str(row["value"])),
        sale_date=parse_utc_datetime(row["sale_date"]),
        client_id=UUID(str(row["client_id"])),
        client=client,
    )


def insert_sale(value: Decimal, client_id: UUID, sale_date: datetime) -> Sale:
    """
    Insert a new sale. The store assigns the sequential id.

    Args:
        value: Validated sale amount
        client_id: Owning client (existence checked by the caller)
        sale_date: UTC timestamp of the sale

    Returns:
        Sale as stored
    """

    payload: dict[str, Any] = {
        "value": str(value),
        "client_id": str(client_id),
        "sale_date": _to_iso_utc(sale_date, name="sale_date"),
    }

    with translate_store_errors("record sale"):
        response = get_supabase().table(_SALES_TABLE).insert(payload).execute()

    rows = rows_or_raise(response, "record sale")
    if not rows:
        raise RuntimeError("Failed to record sale: no row returned")
    return row_to_sale(rows[0])


def list_sales() -> List[Sale]:
    """Retrieve every sale with its client summary, oldest first."""

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .select(_SALE_WITH_CLIENT_COLUMNS)
        .order("sale_date")
        .execute()
    )
    rows = rows_or_raise(response, "list sales")
    return [row_to_sale(row) for row in rows]


def get_sale_by_id(sale_id: int) -> Optional[Sale]:
    """
    Retrieve a single sale with its client summary.

    Returns:
        Sale or None if not found
    """

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .select(_SALE_WITH_CLIENT_COLUMNS)
        .eq("id", sale_id)
        .limit(1)
        .execute()
    )
    rows = rows_or_raise(response, "get sale")

    if not rows:
        return None

    return row_to_sale(rows[0])


def update_sale(sale_id: int, changes: Mapping[str, Any]) -> Optional[Sale]:
    """
    Apply a partial update.

    `changes` uses domain names (value, client_id, sale_date).

    Returns:
        Updated Sale, or None if no sale has this id
    """

    payload: dict[str, Any] = {}
    if "value" in changes:
        payload["value"] = str(changes["value"])
    if "client_id" in changes:
        payload["client_id"] = str(changes["client_id"])
    if "sale_date" in changes:
        payload["sale_date"] = _to_iso_utc(changes["sale_date"], name="sale_date")

    with translate_store_errors("update sale"):
        response = (
            get_supabase()
            .table(_SALES_TABLE)
            .update(payload)
            .eq("id", sale_id)
            .execute()
        )

    rows = rows_or_raise(response, "update sale")
    if not rows:
        return None
    return row_to_sale(rows[0])


def delete_sale(sale_id: int) -> bool:
    """Physically delete a sale. Returns False when nothing was deleted."""

    response = get_supabase().table(_SALES_TABLE).delete().eq("id", sale_id).execute()
    rows = rows_or_raise(response, "delete sale")
    return bool(rows)


def count_sales_by_client(client_id: UUID) -> int:
    """Number of sales owned by a client."""

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .select("id", count="exact")
        .eq("client_id", str(client_id))
        .limit(1)
        .execute()
    )
    rows_or_raise(response, "count sales")
    return int(getattr(response, "count", None) or 0)


def delete_sales_by_client(client_id: UUID) -> int:
    """Delete every sale of a client. Returns the number of rows removed."""

    response = (
        get_supabase()
        .table(_SALES_TABLE)
        .delete()
        .eq("client_id", str(client_id))
        .execute()
    )
    rows = rows_or_raise(response, "delete client sales")
    return len(rows)


__all__ = [
    "row_to_sale",
    "insert_sale",
    "list_sales",
    "get_sale_by_id",
    "update_sale",
    "delete_sale",
    "count_sales_by_client",
    "delete_sales_by_client",
]
