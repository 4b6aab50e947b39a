"""
Sales API Endpoints.

CRUD endpoints for sales plus the per-day sales statistics.
"""

from datetime import date, datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from api.models import (
    ClientSummaryResponse,
    SaleCreateRequest,
    SaleResponse,
    SalesPerDayItem,
    SaleUpdateRequest,
)
from domain.date_range import DateRangeFilters
from domain.sale import Sale
from services import sale_service
from services.sales_stats_service import get_sales_per_day

router = APIRouter()


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_sale_response(sale: Sale) -> SaleResponse:
    client = None
    if sale.client is not None:
        client = ClientSummaryResponse(
            id=sale.client.id,
            name=sale.client.name,
            email=sale.client.email,
        )
    return SaleResponse(
        id=sale.id,
        value=float(sale.value),
        sale_date=sale.sale_date,
        client_id=sale.client_id,
        client=client,
    )


@router.post(
    "/sales",
    response_model=SaleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record Sale",
    description="Record a sale for an existing client."
)
def create_sale(request: SaleCreateRequest):
    """
    Record a sale.

    **Errors:**
    - 400 if the value is not positive or has more than 2 decimal places
    - 422 if the client does not exist
    """
    sale = sale_service.create_sale(
        value=request.value,
        client_id=request.client_id,
        sale_date=_as_utc(request.sale_date),
    )
    return to_sale_response(sale)


@router.get(
    "/sales",
    response_model=List[SaleResponse],
    summary="List Sales"
)
def list_sales():
    """Every sale with its client summary."""
    return [to_sale_response(sale) for sale in sale_service.list_sales()]


@router.get(
    "/sales/stats",
    response_model=List[SalesPerDayItem],
    summary="Sales per Day",
    description="Number of sales per calendar day, with optional date filters."
)
def sales_per_day(
    year: Optional[int] = Query(None, ge=1, le=9998, description="Year; ignored when a range filter is given"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month (1-12); requires year"),
    last_months: Optional[int] = Query(None, alias="lastMonths", ge=1, le=1200, description="Last N months"),
    start_date: Optional[date] = Query(None, alias="startDate", description="Range start (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, alias="endDate", description="Range end, inclusive (YYYY-MM-DD)"),
):
    """
    Sales count per day.

    **Filter precedence:** `startDate`/`endDate` > `lastMonths` > `year`/`month`.

    **Example usage:**
    - `GET /api/v1/sales/stats?year=2025&month=8`
    - `GET /api/v1/sales/stats?startDate=2025-08-01&endDate=2025-08-14`
    """
    filters = DateRangeFilters(
        year=year,
        month=month,
        last_months=last_months,
        start_date=start_date,
        end_date=end_date,
    )
    return get_sales_per_day(filters)


@router.get(
    "/sales/{sale_id}",
    response_model=SaleResponse,
    summary="Get Sale"
)
def get_sale(sale_id: int):
    """Sale with its client summary. 404 if missing."""
    return to_sale_response(sale_service.get_sale(sale_id))


@router.patch(
    "/sales/{sale_id}",
    response_model=SaleResponse,
    summary="Update Sale"
)
def update_sale(sale_id: int, request: SaleUpdateRequest):
    """Partially update a sale. 404 if missing, 422 if the new client does not exist."""
    sale = sale_service.update_sale(
        sale_id,
        value=request.value,
        client_id=request.client_id,
        sale_date=_as_utc(request.sale_date),
    )
    return to_sale_response(sale)


@router.delete(
    "/sales/{sale_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Sale"
)
def delete_sale(sale_id: int):
    """Delete a sale. 404 if missing."""
    sale_service.delete_sale(sale_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
