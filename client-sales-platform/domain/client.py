"""
Domain: Client (customer) records.

A client owns zero or more sales. Deleting a client while it still has
sales requires an explicit cascade.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Optional, Tuple
from uuid import UUID

from .errors import ValidationError
from .time import require_utc_timestamp

if TYPE_CHECKING:
    from .sale import Sale


@dataclass(frozen=True, slots=True)
class ClientSummary:
    """Identity fields of a client, as embedded in rankings and sale listings."""

    id: UUID
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class Client:
    """
    Registered customer.

    `email` is unique across clients. `sales` is only populated by reads that
    explicitly include related sales; it is ordered by sale date ascending.
    """

    id: UUID
    name: str
    email: str
    birth_date: date
    created_at: Optional[datetime] = None
    sales: Tuple["Sale", ...] = ()

    def __post_init__(self) -> None:
        if self.created_at is not None:
            require_utc_timestamp("created_at", self.created_at)

    def summary(self) -> ClientSummary:
        return ClientSummary(id=self.id, name=self.name, email=self.email)


def validate_client_name(name: str) -> str:
    """Strip and require a non-blank client name."""

    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("name must not be empty")
    return cleaned


def validate_client_email(email: str) -> str:
    """Normalize an email address; format checks happen at the HTTP layer."""

    cleaned = (email or "").strip()
    if not cleaned:
        raise ValidationError("email must not be empty")
    return cleaned


__all__ = ["Client", "ClientSummary", "validate_client_name", "validate_client_email"]
