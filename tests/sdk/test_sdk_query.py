from __future__ import annotations

from datetime import date

from barbearia_sdk.models import AppointmentStatus
from barbearia_sdk.query import TableQuery


def test_filters_and_ordering_render_postgrest_params() -> None:
    query = (
        TableQuery()
        .eq("barber", "Lucas")
        .eq("scheduled_date", date(2026, 10, 20))
        .neq("status", AppointmentStatus.CANCELED)
        .order("scheduled_date")
        .order("scheduled_time", ascending=False)
    )

    assert query.to_params() == {
        "select": "*",
        "barber": "eq.Lucas",
        "scheduled_date": "eq.2026-10-20",
        "status": "neq.cancelado",
        "order": "scheduled_date.asc,scheduled_time.desc",
    }


def test_repeated_column_is_combined_with_and() -> None:
    query = TableQuery().gte("scheduled_date", date(2026, 10, 1)).lte("scheduled_date", date(2026, 10, 31))

    params = query.to_params()

    assert "scheduled_date" not in params
    assert params["and"] == "(scheduled_date.gte.2026-10-01,scheduled_date.lte.2026-10-31)"


def test_in_booleans_and_limit() -> None:
    query = TableQuery(select="id,name").in_("id", ["a", "b"]).eq("is_active", True).gt("stock_quantity", 0)
    query.limit = 1

    assert query.to_params() == {
        "select": "id,name",
        "id": "in.(a,b)",
        "is_active": "eq.true",
        "stock_quantity": "gt.0",
        "limit": "1",
    }
