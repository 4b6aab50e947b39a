"""
Sale service: record, read, update and delete sales.

Writes follow a two-step protocol: validate the value, then check that the
referenced client exists, then write. The existence check and the write are
not fenced by a transaction; a client deleted in between is caught by the
store's foreign key and surfaces as UnprocessableReferenceError.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from domain.errors import NotFoundError, UnprocessableReferenceError
from domain.sale import Sale, validate_sale_value
from domain.time import require_utc_timestamp, utc_now
from repositories import sale_repository
from repositories.client_repository import client_exists

logger = logging.getLogger(__name__)


def _require_client(client_id: UUID) -> None:
    if not client_exists(client_id):
        logger.warning("Rejected sale referencing unknown client %s", client_id)
        raise UnprocessableReferenceError(f'Client "{client_id}" does not exist')


def create_sale(value: Any, client_id: UUID, sale_date: Optional[datetime] = None) -> Sale:
    """
    Record a sale for an existing client.

    Args:
        value: Positive amount with at most 2 decimal places
        client_id: Client who bought
        sale_date: UTC timestamp (defaults to now)

    Raises:
        ValidationError: invalid value
        UnprocessableReferenceError: client does not exist
    """

    amount = validate_sale_value(value)
    if sale_date is not None:
        require_utc_timestamp("sale_date", sale_date)

    _require_client(client_id)

    sale = sale_repository.insert_sale(
        value=amount,
        client_id=client_id,
        sale_date=sale_date if sale_date is not None else utc_now(),
    )
    logger.info("Recorded sale %s for client %s", sale.id, client_id)
    return sale


def list_sales() -> List[Sale]:
    """Every sale with its client summary."""

    return sale_repository.list_sales()


def get_sale(sale_id: int) -> Sale:
    """
    Raises:
        NotFoundError: no sale with this id
    """

    sale = sale_repository.get_sale_by_id(sale_id)
    if sale is None:
        raise NotFoundError(f"Sale #{sale_id} not found")
    return sale


def update_sale(
    sale_id: int,
    value: Optional[Any] = None,
    client_id: Optional[UUID] = None,
    sale_date: Optional[datetime] = None,
) -> Sale:
    """
    Partially update a sale.

    Raises:
        NotFoundError: no sale with this id
        ValidationError: invalid value
        UnprocessableReferenceError: new client does not exist
    """

    get_sale(sale_id)

    changes: Dict[str, Any] = {}
    if value is not None:
        changes["value"] = validate_sale_value(value)
    if sale_date is not None:
        require_utc_timestamp("sale_date", sale_date)
        changes["sale_date"] = sale_date
    if client_id is not None:
        _require_client(client_id)
        changes["client_id"] = client_id

    if not changes:
        return get_sale(sale_id)

    sale = sale_repository.update_sale(sale_id, changes)
    if sale is None:
        raise NotFoundError(f"Sale #{sale_id} not found")

    logger.info("Updated sale %s (%s)", sale_id, ", ".join(sorted(changes)))
    return sale


def delete_sale(sale_id: int) -> None:
    """
    Raises:
        NotFoundError: no sale with this id
    """

    if not sale_repository.delete_sale(sale_id):
        raise NotFoundError(f"Sale #{sale_id} not found")
    logger.info("Deleted sale %s", sale_id)


__all__ = ["create_sale", "list_sales", "get_sale", "update_sale", "delete_sale"]
