"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
JSON field names are camelCase; Python attributes are snake_case.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True


# ============================================================================
# Client Models
# ============================================================================

class ClientCreateRequest(_CamelModel):
    """Request to register a client."""
    name: str = Field(..., min_length=1, description="Full name")
    email: str = Field(..., pattern=_EMAIL_PATTERN, description="Unique email address")
    birth_date: date = Field(..., alias="birthDate", description="Birth date (YYYY-MM-DD)")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "Bruce Wayne",
                "email": "wayne.enterprises@email.com",
                "birthDate": "1980-02-19"
            }
        }


class ClientUpdateRequest(_CamelModel):
    """Partial client update; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, pattern=_EMAIL_PATTERN)
    birth_date: Optional[date] = Field(None, alias="birthDate")


class ClientSummaryResponse(_CamelModel):
    id: UUID
    name: str
    email: str


class SaleResponse(_CamelModel):
    """Single sale."""
    id: int
    value: float
    sale_date: datetime = Field(..., alias="saleDate")
    client_id: UUID = Field(..., alias="clientId")
    client: Optional[ClientSummaryResponse] = None


class ClientResponse(_CamelModel):
    """Client with (optionally) its sales."""
    id: UUID
    name: str
    email: str
    birth_date: date = Field(..., alias="birthDate")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    sales: List[SaleResponse] = Field(default_factory=list)


class PageMeta(_CamelModel):
    total: int
    page: int
    limit: int
    last_page: int = Field(..., alias="lastPage")


class ClientListResponse(_CamelModel):
    """Paginated client listing."""
    data: List[ClientResponse]
    meta: PageMeta

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "data": [],
                "meta": {"total": 25, "page": 1, "limit": 10, "lastPage": 3}
            }
        }


# ============================================================================
# Ranking Models
# ============================================================================

class TopClientByTotalSalesResponse(ClientSummaryResponse):
    total_sales_value: float = Field(..., alias="totalSalesValue")


class TopClientByAverageSaleResponse(ClientSummaryResponse):
    average_sale_value: float = Field(..., alias="averageSaleValue")


class FrequentClientResponse(ClientSummaryResponse):
    unique_sale_days: int = Field(..., alias="uniqueSaleDays")


# ============================================================================
# Sale Models
# ============================================================================

class SaleCreateRequest(_CamelModel):
    """Request to record a sale."""
    value: Decimal = Field(..., description="Positive amount, at most 2 decimal places")
    client_id: UUID = Field(..., alias="clientId")
    sale_date: Optional[datetime] = Field(
        None,
        alias="saleDate",
        description="ISO-8601 timestamp; defaults to now"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "value": 199.99,
                "clientId": "a1b2c3d4-e5f6-7890-1234-567890abcdef",
                "saleDate": "2025-08-13T10:00:00Z"
            }
        }


class SaleUpdateRequest(_CamelModel):
    """Partial sale update; omitted fields are left unchanged."""
    value: Optional[Decimal] = None
    client_id: Optional[UUID] = Field(None, alias="clientId")
    sale_date: Optional[datetime] = Field(None, alias="saleDate")


class SalesPerDayItem(_CamelModel):
    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    total: int


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str
    error_code: str
    path: str

    class Config:
        json_schema_extra = {
            "example": {
                "detail": "page must be a positive integer",
                "error_code": "VALIDATION_ERROR",
                "path": "/api/v1/clients/report"
            }
        }
