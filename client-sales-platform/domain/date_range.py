"""
Domain: date-range resolution for sales statistics.

Heterogeneous filters are collapsed into a single `[gte, lt)` interval.

Precedence (highest first):
1. explicit `start_date` / `end_date`
2. `last_months`
3. `year` / `year + month`

A lower-precedence filter never overwrites a bound set by a higher one. The
year/month branch is skipped entirely once any range filter is present.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

from .errors import ValidationError
from .time import start_of_day_utc, utc_now


@dataclass(frozen=True, slots=True)
class DateRangeFilters:
    year: Optional[int] = None
    month: Optional[int] = None
    last_months: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True, slots=True)
class ResolvedRange:
    """Half-open UTC interval; either bound may be open."""

    gte: Optional[datetime] = None
    lt: Optional[datetime] = None

    def contains(self, moment: datetime) -> bool:
        if self.gte is not None and moment < self.gte:
            return False
        if self.lt is not None and moment >= self.lt:
            return False
        return True


def resolve_date_range(
    filters: DateRangeFilters,
    now: Optional[datetime] = None,
) -> Optional[ResolvedRange]:
    """
    Resolve filters into a concrete range, or None when unbounded.

    Args:
        filters: Raw filter values (already type-checked upstream)
        now: Reference instant for `last_months` (defaults to current UTC time)

    Returns:
        ResolvedRange, or None when no filter applies

    Raises:
        ValidationError: non-positive lastMonths, month outside 1..12, or a
            range that falls outside the supported calendar (years 1..9999)

    Example:
        resolve_date_range(DateRangeFilters(year=2025, month=12))
        # ResolvedRange(gte=2025-12-01T00:00Z, lt=2026-01-01T00:00Z)
    """

    gte: Optional[datetime] = None
    lt: Optional[datetime] = None

    if filters.last_months is not None and filters.last_months < 1:
        raise ValidationError("lastMonths must be a positive integer")
    if filters.month is not None and not 1 <= filters.month <= 12:
        raise ValidationError("month must be between 1 and 12")

    range_applied = (
        filters.start_date is not None
        or filters.end_date is not None
        or filters.last_months is not None
    )

    try:
        if filters.last_months is not None:
            reference = now if now is not None else utc_now()
            gte = start_of_day_utc(reference - relativedelta(months=filters.last_months))

        if filters.start_date is not None:
            gte = start_of_day_utc(filters.start_date)

        if filters.end_date is not None:
            lt = start_of_day_utc(filters.end_date) + timedelta(days=1)

        if not range_applied and filters.year is not None:
            if filters.month is not None:
                gte = start_of_day_utc(date(filters.year, filters.month, 1))
                lt = gte + relativedelta(months=1)
            else:
                gte = start_of_day_utc(date(filters.year, 1, 1))
                lt = start_of_day_utc(date(filters.year + 1, 1, 1))
    except (ValueError, OverflowError) as exc:
        raise ValidationError(f"date filters are out of range: {exc}") from exc

    if gte is None and lt is None:
        return None

    return ResolvedRange(gte=gte, lt=lt)


__all__ = ["DateRangeFilters", "ResolvedRange", "resolve_date_range"]
