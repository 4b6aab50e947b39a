"""
Domain: pagination parameters.

Turns optional `page` / `limit` inputs into the `skip` / `take` pair used by
paginated reads. Validation happens here, before any query is issued.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from .errors import ValidationError

DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 10


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Resolved pagination window."""

    skip: int
    take: int
    page: int
    limit: int


def _as_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a positive integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 1:
        raise ValidationError(f"{name} must be a positive integer")
    return value


def normalize_pagination(page: Optional[Any] = None, limit: Optional[Any] = None) -> PageRequest:
    """
    Validate page/limit (defaulting to 1 and 10) and derive skip/take.

    Raises:
        ValidationError: page or limit is zero, negative or fractional.
    """

    page_number = _as_positive_int("page", DEFAULT_PAGE if page is None else page)
    page_size = _as_positive_int("limit", DEFAULT_LIMIT if limit is None else limit)

    return PageRequest(
        skip=(page_number - 1) * page_size,
        take=page_size,
        page=page_number,
        limit=page_size,
    )


def last_page(total: int, limit: int) -> int:
    """Number of the last page for `total` records, i.e. ceil(total / limit)."""

    return math.ceil(total / limit)


__all__ = ["DEFAULT_PAGE", "DEFAULT_LIMIT", "PageRequest", "normalize_pagination", "last_page"]
