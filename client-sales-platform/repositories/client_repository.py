"""
Client repository for managing customer records.

Provides functions to query, page through and write client rows. Business
rules (email uniqueness check, dependent-sale protection) live in services.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple
from uuid import UUID, uuid4

from domain.client import Client, ClientSummary
from domain.errors import ConflictError
from domain.time import parse_date, parse_utc_datetime, utc_now
from repositories.client import get_supabase
from repositories.errors import rows_or_raise, translate_store_errors
from repositories.sale_repository import row_to_sale

_CLIENTS_TABLE: str = "clients"

_CLIENT_COLUMNS: str = "id, name, email, birth_date, created_at"
_CLIENT_WITH_SALES_COLUMNS: str = f"{_CLIENT_COLUMNS}, sales(id, value, sale_date, client_id)"


def _contains_pattern(text: str) -> str:
    """LIKE pattern matching `text` as a literal substring."""

    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _row_to_client(row: Mapping[str, Any]) -> Client:
    """Convert a Supabase row (optionally with embedded sales) into a Client."""

    sales = tuple(row_to_sale(sale_row) for sale_row in row.get("sales") or ())

    return Client(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        birth_date=parse_date(row["birth_date"]),
        created_at=parse_utc_datetime(row["created_at"]) if row.get("created_at") else None,
        sales=sales,
    )


def get_client_by_id(client_id: UUID, include_sales: bool = False) -> Optional[Client]:
    """
    Get a client by id.

    Args:
        client_id: UUID of the client
        include_sales: Embed the client's sales, ordered by sale date ascending

    Returns:
        Client domain model or None if not found
    """

    query = (
        get_supabase()
        .table(_CLIENTS_TABLE)
        .select(_CLIENT_WITH_SALES_COLUMNS if include_sales else _CLIENT_COLUMNS)
        .eq("id", str(client_id))
    )
    if include_sales:
        query = query.order("sale_date", foreign_table="sales")

    response = query.limit(1).execute()
    rows = rows_or_raise(response, "fetch client")

    if not rows:
        return None

    return _row_to_client(rows[0])


def get_client_by_email(email: str) -> Optional[Client]:
    """
    Get a client by their email address (exact match).

    Returns:
        Client domain model or None if not found
    """

    response = (
        get_supabase()
        .table(_CLIENTS_TABLE)
        .select(_CLIENT_COLUMNS)
        .eq("email", email)
        .limit(1)
        .execute()
    )
    rows = rows_or_raise(response, "fetch client")

    if not rows:
        return None

    return _row_to_client(rows[0])


def client_exists(client_id: UUID) -> bool:
    """Existence check used before writing a sale that references the client."""

    response = (
        get_supabase()
        .table(_CLIENTS_TABLE)
        .select("id")
        .eq("id", str(client_id))
        .limit(1)
        .execute()
    )
    return bool(rows_or_raise(response, "check client"))


def get_client_summaries(client_ids: Iterable[UUID]) -> List[ClientSummary]:
    """Fetch `{id, name, email}` for a set of clients (unknown ids are skipped)."""

    ids = [str(client_id) for client_id in client_ids]
    if not ids:
        return []

    response = (
        get_supabase()
        .table(_CLIENTS_TABLE)
        .select("id, name, email")
        .in_("id", ids)
        .execute()
    )
    rows = rows_or_raise(response, "fetch clients")

    return [
        ClientSummary(id=UUID(str(row["id"])), name=str(row["name"]), email=str(row["email"]))
        for row in rows
    ]


def list_clients_page(
    skip: int,
    take: int,
    name: Optional[str] = None,
    email: Optional[str] = None,
    include_sales: bool = False,
) -> Tuple[List[Client], int]:
    """
    Fetch one page of clients together with the total matching count.

    Rows and count come from the same request (`count="exact"`), so both are
    evaluated by a single statement against the same filter predicate.

    Args:
        skip: Rows to skip
        take: Page size
        name: Case-insensitive partial match on name
        email: Case-insensitive partial match on email
        include_sales: Embed each client's sales, ordered by sale date ascending

    Returns:
        (clients ordered by created_at descending, total matching count)
    """

    query = (
        get_supabase()
        .table(_CLIENTS_TABLE)
        .select(_CLIENT_WITH_SALES_COLUMNS if include_sales else _CLIENT_COLUMNS, count="exact")
    )

    if name:
        query = query.ilike("name", _contains_pattern(name))
    if email:
        query = query.ilike("email", _contains_pattern(email))

    query = query.order("created_at", desc=True)
    if include_sales:
        query = query.order("sale_date", foreign_table="sales")

    response = query.range(skip, skip + take - 1).execute()
    rows = rows_or_raise(response, "list clients")

    total = getattr(response, "count", None)
    return [_row_to_client(row) for row in rows], int(total or 0)


def insert_client(name: str, email: str, birth_date: date) -> Client:
    """Insert a new client with a fresh UUID and creation timestamp."""

    client_id = uuid4()
    now: datetime = utc_now()

    payload: dict[str, Any] = {
        "id": str(client_id),
        "name": name,
        "email": email,
        "birth_date": birth_date.isoformat(),
        "created_at": now.isoformat(),
    }

    with translate_store_errors("create client"):
        response = get_supabase().table(_CLIENTS_TABLE).insert(payload).execute()

    rows_or_raise(response, "create client")

    return Client(id=client_id, name=name, email=email, birth_date=birth_date, created_at=now)


def update_client(client_id: UUID, changes: Mapping[str, Any]) -> Optional[Client]:
    """
    Apply a partial update (name, email, birth_date).

    Returns:
        Updated Client, or None if no client has this id
    """

    payload: dict[str, Any] = {}
    if "name" in changes:
        payload["name"] = changes["name"]
    if "email" in changes:
        payload["email"] = changes["email"]
    if "birth_date" in changes:
        payload["birth_date"] = changes["birth_date"].isoformat()

    with translate_store_errors("update client"):
        response = (
            get_supabase()
            .table(_CLIENTS_TABLE)
            .update(payload)
            .eq("id", str(client_id))
            .execute()
        )

    rows = rows_or_raise(response, "update client")
    if not rows:
        return None
    return _row_to_client(rows[0])


def delete_client(client_id: UUID) -> bool:
    """Physically delete a client row. Returns False when nothing was deleted."""

    with translate_store_errors("delete client", foreign_key_error=ConflictError):
        response = (
            get_supabase()
            .table(_CLIENTS_TABLE)
            .delete()
            .eq("id", str(client_id))
            .execute()
        )

    return bool(rows_or_raise(response, "delete client"))


__all__ = [
    "get_client_by_id",
    "get_client_by_email",
    "client_exists",
    "get_client_summaries",
    "list_clients_page",
    "insert_client",
    "update_client",
    "delete_client",
]
