"""
Domain: Sale records.

A sale is a monetary transaction attributed to exactly one client at
creation time. The referenced client must exist when the sale is written;
there is no live re-check afterwards.

Sale values are positive amounts with at most 2 fractional digits.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional
from uuid import UUID

from .client import ClientSummary
from .errors import ValidationError
from .time import require_utc_timestamp

_CENT = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class Sale:
    """
    Immutable sale record.

    `id` is assigned by the store (sequential). `client` is only populated by
    reads that include the owning client.
    """

    id: int
    value: Decimal
    sale_date: datetime
    client_id: UUID
    client: Optional[ClientSummary] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("sale_date", self.sale_date)


def validate_sale_value(value: Any) -> Decimal:
    """
    Validate a raw sale value and return it as a Decimal.

    Raises:
        ValidationError: value is not a finite number, is not positive, or
            has more than 2 decimal places.
    """

    if isinstance(value, bool) or value is None:
        raise ValidationError("value must be a number")

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("value must be a number") from None

    if not amount.is_finite():
        raise ValidationError("value must be a number")
    if amount <= 0:
        raise ValidationError("value must be positive")
    if amount.normalize().as_tuple().exponent < -2:
        raise ValidationError("value must have at most 2 decimal places")

    return amount


def round_currency(amount: Decimal) -> Decimal:
    """Round to cents using half-up rounding (not truncation)."""

    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


__all__ = ["Sale", "validate_sale_value", "round_currency"]
