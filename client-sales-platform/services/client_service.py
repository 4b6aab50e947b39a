"""
Client service: create, read, list, update and delete clients.

Handles:
- Email uniqueness check before insert (ConflictError)
- Paginated, filtered listing with total count
- Protection against deleting clients that still own sales
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from domain.client import Client, validate_client_email, validate_client_name
from domain.errors import ConflictError, NotFoundError
from domain.pagination import last_page, normalize_pagination
from repositories import client_repository
from repositories.sale_repository import count_sales_by_client, delete_sales_by_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClientPage:
    """One page of clients plus paging metadata."""

    items: List[Client]
    total: int
    page: int
    limit: int

    @property
    def last_page(self) -> int:
        return last_page(self.total, self.limit)


def create_client(name: str, email: str, birth_date: date) -> Client:
    """
    Register a new client.

    Raises:
        ValidationError: blank name or email
        ConflictError: email already registered
    """

    name = validate_client_name(name)
    email = validate_client_email(email)

    if client_repository.get_client_by_email(email) is not None:
        raise ConflictError(f'Email "{email}" is already in use')

    client = client_repository.insert_client(name=name, email=email, birth_date=birth_date)
    logger.info("Created client %s", client.id)
    return client


def get_client(client_id: UUID) -> Client:
    """
    Fetch a client with its sales.

    Raises:
        NotFoundError: no client with this id
    """

    client = client_repository.get_client_by_id(client_id, include_sales=True)
    if client is None:
        raise NotFoundError(f'Client "{client_id}" not found')
    return client


def list_clients(
    page: Optional[Any] = None,
    limit: Optional[Any] = None,
    name: Optional[str] = None,
    email: Optional[str] = None,
) -> ClientPage:
    """
    List clients newest first with optional partial name/email filters.

    Raises:
        ValidationError: page or limit is not a positive integer
    """

    window = normalize_pagination(page, limit)
    clients, total = client_repository.list_clients_page(
        skip=window.skip,
        take=window.take,
        name=name,
        email=email,
    )
    return ClientPage(items=clients, total=total, page=window.page, limit=window.limit)


def update_client(
    client_id: UUID,
    name: Optional[str] = None,
    email: Optional[str] = None,
    birth_date: Optional[date] = None,
) -> Client:
    """
    Partially update a client. Only the provided fields change.

    Raises:
        ValidationError: blank name or email
        NotFoundError: no client with this id
        ConflictError: new email belongs to another client
    """

    changes: Dict[str, Any] = {}
    if name is not None:
        changes["name"] = validate_client_name(name)
    if email is not None:
        changes["email"] = validate_client_email(email)
    if birth_date is not None:
        changes["birth_date"] = birth_date

    if not changes:
        return get_client(client_id)

    client = client_repository.update_client(client_id, changes)
    if client is None:
        raise NotFoundError(f'Client "{client_id}" not found')

    logger.info("Updated client %s (%s)", client_id, ", ".join(sorted(changes)))
    return client


def delete_client(client_id: UUID, cascade: bool = False) -> None:
    """
    Delete a client.

    A client that still owns sales is only deleted when `cascade` is True, in
    which case its sales are removed first.

    Raises:
        NotFoundError: no client with this id
        ConflictError: client still owns sales and cascade is False
    """

    if client_repository.get_client_by_id(client_id) is None:
        raise NotFoundError(f'Client "{client_id}" not found')

    sale_count = count_sales_by_client(client_id)
    if sale_count:
        if not cascade:
            raise ConflictError(
                f'Client "{client_id}" still has {sale_count} sale(s); delete them first or cascade'
            )
        removed = delete_sales_by_client(client_id)
        logger.info("Removed %s sale(s) of client %s", removed, client_id)

    if not client_repository.delete_client(client_id):
        raise NotFoundError(f'Client "{client_id}" not found')

    logger.info("Deleted client %s", client_id)


__all__ = [
    "ClientPage",
    "create_client",
    "get_client",
    "list_clients",
    "update_client",
    "delete_client",
]
