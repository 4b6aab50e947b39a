"""
Clients API Endpoints.

CRUD endpoints for clients plus the client report and "top client" rankings.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from api.models import (
    ClientCreateRequest,
    ClientListResponse,
    ClientResponse,
    ClientUpdateRequest,
    FrequentClientResponse,
    PageMeta,
    SaleResponse,
    TopClientByAverageSaleResponse,
    TopClientByTotalSalesResponse,
)
from domain.client import Client
from services import client_service
from services.client_ranking_service import (
    get_top_client_by_average_sale_value,
    get_top_client_by_total_sales,
    get_top_clients_by_purchase_frequency,
)
from services.client_report_service import build_client_report

router = APIRouter()


def to_client_response(client: Client) -> ClientResponse:
    return ClientResponse(
        id=client.id,
        name=client.name,
        email=client.email,
        birth_date=client.birth_date,
        created_at=client.created_at,
        sales=[
            SaleResponse(
                id=sale.id,
                value=float(sale.value),
                sale_date=sale.sale_date,
                client_id=sale.client_id,
            )
            for sale in client.sales
        ],
    )


@router.post(
    "/clients",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client",
    description="Register a new client. Email addresses are unique."
)
def create_client(request: ClientCreateRequest):
    """
    Register a client.

    **Errors:**
    - 400 if the name is blank
    - 409 if the email is already registered
    """
    client = client_service.create_client(
        name=request.name,
        email=request.email,
        birth_date=request.birth_date,
    )
    return to_client_response(client)


@router.get(
    "/clients",
    response_model=ClientListResponse,
    summary="List Clients",
    description="Paginated client listing with optional partial name/email filters."
)
def list_clients(
    page: Optional[int] = Query(None, description="Page number (default 1)"),
    limit: Optional[int] = Query(None, description="Page size (default 10)"),
    name: Optional[str] = Query(None, description="Partial, case-insensitive name filter"),
    email: Optional[str] = Query(None, description="Partial, case-insensitive email filter"),
):
    """
    List clients, newest first.

    **Example usage:**
    - `GET /api/v1/clients?page=2&limit=5`
    - `GET /api/v1/clients?name=diana`
    """
    result = client_service.list_clients(page=page, limit=limit, name=name, email=email)
    return ClientListResponse(
        data=[to_client_response(client) for client in result.items],
        meta=PageMeta(
            total=result.total,
            page=result.page,
            limit=result.limit,
            last_page=result.last_page,
        ),
    )


@router.get(
    "/clients/report",
    summary="Client Report",
    description="Nested report of clients and their sales, with pagination and filters."
)
def get_client_report(
    page: Optional[int] = Query(None, description="Page number (default 1)"),
    limit: Optional[int] = Query(None, description="Page size (default 10)"),
    name: Optional[str] = Query(None, description="Partial, case-insensitive name filter"),
    email: Optional[str] = Query(None, description="Partial, case-insensitive email filter"),
):
    """
    Build the nested client report.

    **Response shape:**
    ```json
    {
      "data": {"clientes": [{"info": {...}, "estatisticas": {"vendas": [...]}}]},
      "meta": {"registroTotal": 25, "pagina": 1, "limite": 10, "ultimaPagina": 3},
      "redundante": {"status": "ok"}
    }
    ```
    """
    return build_client_report(page=page, limit=limit, name=name, email=email)


@router.get(
    "/clients/stats/top-total-sales",
    response_model=Optional[TopClientByTotalSalesResponse],
    summary="Top Client by Total Sales"
)
def top_client_by_total_sales():
    """Client with the highest total sale value, or `null` when there are no sales."""
    top = get_top_client_by_total_sales()
    return top.as_dict() if top else None


@router.get(
    "/clients/stats/top-average-sale",
    response_model=Optional[TopClientByAverageSaleResponse],
    summary="Top Client by Average Sale"
)
def top_client_by_average_sale():
    """Client with the highest average sale value, or `null` when there are no sales."""
    top = get_top_client_by_average_sale_value()
    return top.as_dict() if top else None


@router.get(
    "/clients/stats/top-purchase-frequency",
    response_model=List[FrequentClientResponse],
    summary="Top Clients by Purchase Frequency"
)
def top_clients_by_purchase_frequency():
    """Every client tied for the most distinct days with at least one sale."""
    return [client.as_dict() for client in get_top_clients_by_purchase_frequency()]


@router.get(
    "/clients/{client_id}",
    response_model=ClientResponse,
    summary="Get Client"
)
def get_client(client_id: UUID):
    """Client with its sales (oldest first). 404 if missing."""
    return to_client_response(client_service.get_client(client_id))


@router.patch(
    "/clients/{client_id}",
    response_model=ClientResponse,
    summary="Update Client"
)
def update_client(client_id: UUID, request: ClientUpdateRequest):
    """Partially update a client. 404 if missing, 409 on a duplicate email."""
    client = client_service.update_client(
        client_id,
        name=request.name,
        email=request.email,
        birth_date=request.birth_date,
    )
    return to_client_response(client)


@router.delete(
    "/clients/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Client"
)
def delete_client(
    client_id: UUID,
    cascade: bool = Query(False, description="Also delete the client's sales"),
):
    """
    Delete a client.

    A client that still owns sales is rejected with 409 unless `cascade=true`.
    """
    client_service.delete_client(client_id, cascade=cascade)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
