"""
Tests for the Supabase-backed repositories.

A fake client records the PostgREST builder calls so the tests can check
query shape (filters, ordering, range, count) and row mapping without a
database.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest
from postgrest.exceptions import APIError

from domain.errors import ConflictError, UnprocessableReferenceError
from repositories import client_repository, sale_repository, sales_analytics_repository
from repositories.errors import translate_store_errors
from repositories.sales_analytics_repository import SaleAggregate

CLIENT_ID = "00000000-0000-0000-0000-000000000001"

CLIENT_ROW = {
    "id": CLIENT_ID,
    "name": "Fulano da Silva",
    "email": "fulano.silva@example.com",
    "birth_date": "2000-02-02",
    "created_at": "2025-01-01T12:00:00Z",
    "sales": [
        {"id": 7, "value": "100.50", "sale_date": "2023-10-26T00:00:00+00:00", "client_id": CLIENT_ID},
    ],
}


def api_error(code: str) -> APIError:
    return APIError({"message": "constraint violated", "code": code, "hint": None, "details": None})


def test_list_clients_page_reads_rows_and_count_in_one_request(fake_supabase) -> None:
    fake_supabase.queue(data=[CLIENT_ROW], count=25)

    clients, total = client_repository.list_clients_page(
        skip=10, take=10, name="ful", email="EXAMPLE", include_sales=True
    )

    assert total == 25
    assert len(fake_supabase.queries) == 1
    query = fake_supabase.queries[0]
    assert query.name == "clients"
    assert query.called("select")[0][1] == {"count": "exact"}
    assert query.called("ilike") == [(("name", "%ful%"), {}), (("email", "%EXAMPLE%"), {})]
    assert query.called("order") == [
        (("created_at",), {"desc": True}),
        (("sale_date",), {"foreign_table": "sales"}),
    ]
    assert query.called("range") == [((10, 19), {})]

    client = clients[0]
    assert client.id == UUID(CLIENT_ID)
    assert client.birth_date == date(2000, 2, 2)
    assert client.created_at == datetime(2025, 1, 1, 12, tzinfo=timezone.utc)
    assert client.sales[0].value == Decimal("100.50")
    assert client.sales[0].sale_date == datetime(2023, 10, 26, tzinfo=timezone.utc)


def test_list_clients_page_without_filters(fake_supabase) -> None:
    fake_supabase.queue(data=[], count=0)

    clients, total = client_repository.list_clients_page(skip=0, take=10)

    assert (clients, total) == ([], 0)
    assert fake_supabase.queries[0].called("ilike") == []


def test_list_clients_page_treats_wildcards_in_filters_literally(fake_supabase) -> None:
    fake_supabase.queue(data=[], count=0)

    client_repository.list_clients_page(skip=0, take=10, name="50%_off", email="a\\b")

    assert fake_supabase.queries[0].called("ilike") == [
        (("name", "%50\\%\\_off%"), {}),
        (("email", "%a\\\\b%"), {}),
    ]


def test_get_client_by_id_missing_returns_none(fake_supabase) -> None:
    fake_supabase.queue(data=[])

    assert client_repository.get_client_by_id(UUID(CLIENT_ID)) is None


def test_response_error_raises_runtime_error(fake_supabase) -> None:
    fake_supabase.queue(error="boom")

    with pytest.raises(RuntimeError, match="boom"):
        client_repository.get_client_by_email("x@example.com")


def test_insert_client_duplicate_email_is_conflict(fake_supabase) -> None:
    fake_supabase.queue(raises=api_error("23505"))

    with pytest.raises(ConflictError):
        client_repository.insert_client("Dup", "dup@example.com", date(2000, 1, 1))


def test_insert_sale_missing_client_is_unprocessable(fake_supabase) -> None:
    fake_supabase.queue(raises=api_error("23503"))

    with pytest.raises(UnprocessableReferenceError):
        sale_repository.insert_sale(
            Decimal("10.00"), UUID(CLIENT_ID), datetime(2025, 8, 14, tzinfo=timezone.utc)
        )


def test_delete_client_with_dependent_sales_is_conflict(fake_supabase) -> None:
    fake_supabase.queue(raises=api_error("23503"))

    with pytest.raises(ConflictError):
        client_repository.delete_client(UUID(CLIENT_ID))


def test_unrecognized_store_errors_propagate_unmodified() -> None:
    original = api_error("42P01")

    with pytest.raises(APIError) as excinfo:
        with translate_store_errors("do something"):
            raise original

    assert excinfo.value is original


def test_insert_sale_maps_returned_row(fake_supabase) -> None:
    fake_supabase.queue(data=[
        {"id": 3, "value": 199.99, "sale_date": "2025-08-13T10:00:00Z", "client_id": CLIENT_ID},
    ])

    sale = sale_repository.insert_sale(
        Decimal("199.99"), UUID(CLIENT_ID), datetime(2025, 8, 13, 10, tzinfo=timezone.utc)
    )

    assert sale.id == 3
    assert sale.value == Decimal("199.99")
    payload = fake_supabase.queries[0].called("insert")[0][0][0]
    assert payload == {
        "value": "199.99",
        "client_id": CLIENT_ID,
        "sale_date": "2025-08-13T10:00:00+00:00",
    }


def test_get_sale_embeds_client_summary(fake_supabase) -> None:
    fake_supabase.queue(data=[{
        "id": 1,
        "value": "100",
        "sale_date": "2025-08-13T10:00:00Z",
        "client_id": CLIENT_ID,
        "client": {"id": CLIENT_ID, "name": "Test", "email": "test@email.com"},
    }])

    sale = sale_repository.get_sale_by_id(1)

    assert sale.client.name == "Test"
    assert fake_supabase.queries[0].called("eq") == [(("id", 1), {})]


def test_aggregate_sales_by_client_calls_rpc(fake_supabase) -> None:
    fake_supabase.queue(data=[{"client_id": CLIENT_ID, "value": "500.75"}])

    groups = sales_analytics_repository.aggregate_sales_by_client(SaleAggregate.TOTAL, limit=1)

    query = fake_supabase.queries[0]
    assert (query.kind, query.name, query.params) == (
        "rpc", "aggregate_sales_by_client", {"p_metric": "sum", "p_limit": 1}
    )
    assert groups[0].value == Decimal("500.75")


def test_count_sales_per_day_passes_open_bounds_as_null(fake_supabase) -> None:
    fake_supabase.queue(data=[
        {"day": "2025-08-13", "total": 2},
        {"day": "2025-08-14", "total": 1},
    ])

    rows = sales_analytics_repository.count_sales_per_day()

    assert fake_supabase.queries[0].params == {"p_gte": None, "p_lt": None}
    assert [(row.day, row.total) for row in rows] == [
        (date(2025, 8, 13), 2),
        (date(2025, 8, 14), 1),
    ]


def test_count_unique_sale_days_by_client(fake_supabase) -> None:
    fake_supabase.queue(data=[{"client_id": CLIENT_ID, "unique_sale_days": 3}])

    rows = sales_analytics_repository.count_unique_sale_days_by_client()

    assert rows[0].client_id == UUID(CLIENT_ID)
    assert rows[0].unique_sale_days == 3
