"""
Tests for `domain/date_range.py`.

Covers:
- Explicit ranges include the whole end day.
- year / year+month ranges, including the December rollover.
- lastMonths truncates to midnight and leaves the upper bound open.
- Precedence: startDate/endDate > lastMonths > year/month.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from domain.date_range import DateRangeFilters, ResolvedRange, resolve_date_range
from domain.errors import ValidationError

NOW = datetime(2025, 8, 14, 15, 30, tzinfo=timezone.utc)


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_no_filters_is_unbounded() -> None:
    assert resolve_date_range(DateRangeFilters(), now=NOW) is None


def test_explicit_range_includes_whole_end_day() -> None:
    resolved = resolve_date_range(
        DateRangeFilters(start_date=date(2025, 8, 1), end_date=date(2025, 8, 14))
    )

    assert resolved == ResolvedRange(gte=utc(2025, 8, 1), lt=utc(2025, 8, 15))


def test_end_date_alone_only_sets_upper_bound() -> None:
    resolved = resolve_date_range(DateRangeFilters(end_date=date(2025, 8, 14)))

    assert resolved == ResolvedRange(gte=None, lt=utc(2025, 8, 15))


def test_year_alone_covers_the_whole_year() -> None:
    resolved = resolve_date_range(DateRangeFilters(year=2025))

    assert resolved == ResolvedRange(gte=utc(2025, 1, 1), lt=utc(2026, 1, 1))


def test_year_and_month_cover_the_month() -> None:
    resolved = resolve_date_range(DateRangeFilters(year=2025, month=8))

    assert resolved == ResolvedRange(gte=utc(2025, 8, 1), lt=utc(2025, 9, 1))


def test_december_rolls_over_to_next_year() -> None:
    resolved = resolve_date_range(DateRangeFilters(year=2025, month=12))

    assert resolved == ResolvedRange(gte=utc(2025, 12, 1), lt=utc(2026, 1, 1))


def test_month_without_year_is_ignored() -> None:
    assert resolve_date_range(DateRangeFilters(month=8), now=NOW) is None


def test_last_months_truncates_to_midnight_and_is_open_ended() -> None:
    resolved = resolve_date_range(DateRangeFilters(last_months=2), now=NOW)

    assert resolved == ResolvedRange(gte=utc(2025, 6, 14), lt=None)


def test_last_months_clamps_to_end_of_shorter_month() -> None:
    now = utc(2025, 3, 31, 8, 0)

    resolved = resolve_date_range(DateRangeFilters(last_months=1), now=now)

    assert resolved.gte == utc(2025, 2, 28)


def test_start_date_overrides_last_months() -> None:
    resolved = resolve_date_range(
        DateRangeFilters(last_months=6, start_date=date(2025, 8, 1)),
        now=NOW,
    )

    assert resolved.gte == utc(2025, 8, 1)


def test_range_filters_skip_year_and_month() -> None:
    resolved = resolve_date_range(
        DateRangeFilters(
            last_months=2,
            start_date=date(2025, 8, 1),
            end_date=date(2025, 8, 14),
            year=2024,
            month=3,
        ),
        now=NOW,
    )

    assert resolved == ResolvedRange(gte=utc(2025, 8, 1), lt=utc(2025, 8, 15))


def test_last_months_beats_year() -> None:
    resolved = resolve_date_range(DateRangeFilters(last_months=1, year=2020), now=NOW)

    assert resolved == ResolvedRange(gte=utc(2025, 7, 14), lt=None)


def test_invalid_month_is_rejected() -> None:
    with pytest.raises(ValidationError):
        resolve_date_range(DateRangeFilters(year=2025, month=13))


def test_resolved_range_is_half_open() -> None:
    resolved = ResolvedRange(gte=utc(2025, 8, 1), lt=utc(2025, 8, 15))

    assert resolved.contains(utc(2025, 8, 1))
    assert resolved.contains(utc(2025, 8, 14, 23, 59))
    assert not resolved.contains(utc(2025, 8, 15))
    assert not resolved.contains(utc(2025, 7, 31, 23, 59))


@pytest.mark.parametrize(
    "filters",
    [
        DateRangeFilters(year=9999),
        DateRangeFilters(year=0),
        DateRangeFilters(year=9999, month=12),
        DateRangeFilters(year=-5, month=1),
        DateRangeFilters(last_months=100000),
        DateRangeFilters(end_date=date(9999, 12, 31)),
    ],
)
def test_out_of_calendar_ranges_are_rejected(filters: DateRangeFilters) -> None:
    with pytest.raises(ValidationError, match="out of range"):
        resolve_date_range(filters, now=NOW)


def test_last_month_of_year_9999_that_fits_is_resolved() -> None:
    resolved = resolve_date_range(DateRangeFilters(year=9999, month=11))

    assert resolved == ResolvedRange(gte=utc(9999, 11, 1), lt=utc(9999, 12, 1))
