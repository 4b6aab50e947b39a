"""
Sales statistics service: number of sales per calendar day.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from domain.date_range import DateRangeFilters, resolve_date_range
from repositories.sales_analytics_repository import count_sales_per_day

logger = logging.getLogger(__name__)


def get_sales_per_day(
    filters: Optional[DateRangeFilters] = None,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Sparse daily series of sale counts.

    Args:
        filters: year / month / lastMonths / startDate / endDate filters
        now: Reference instant for `lastMonths` (defaults to current UTC time)

    Returns:
        [{"date": "YYYY-MM-DD", "total": n}, ...] ascending by date; days
        without sales are omitted

    Example:
        get_sales_per_day(DateRangeFilters(year=2025, month=8))
        # [{"date": "2025-08-13", "total": 2}, {"date": "2025-08-14", "total": 1}]
    """

    resolved = resolve_date_range(filters or DateRangeFilters(), now=now)
    logger.debug("Sales per day range: %s", resolved)

    if resolved is None:
        rows = count_sales_per_day()
    else:
        rows = count_sales_per_day(gte=resolved.gte, lt=resolved.lt)

    return [
        {"date": row.day.isoformat(), "total": row.total}
        for row in sorted(rows, key=lambda row: row.day)
    ]


__all__ = ["get_sales_per_day"]
