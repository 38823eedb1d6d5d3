"""
tests/test_api_routers.py

HTTP surface exercised through FastAPI's TestClient with an in-memory database.
"""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.main import create_app
from db.session import get_db
from tests.sample_tables import BASIC_TABLE_HTML, CONSIGNABLE_ROWS_HTML


@pytest.fixture()
def app(session: Session) -> Generator[FastAPI, None, None]:
    application = create_app(check_database=False)
    application.dependency_overrides[get_db] = lambda: session
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def imported(client: TestClient) -> TestClient:
    response = client.post("/imports/html", json={"html_data": BASIC_TABLE_HTML})
    assert response.status_code == 200
    response = client.post(
        "/imports/html",
        json={"html_data": CONSIGNABLE_ROWS_HTML, "options": {"use_consignable_format": True}},
    )
    assert response.status_code == 200
    return client


class TestHealth:
    def test_reports_connected_database(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "service": "sales-import",
            "database": {"connected": True, "error": None},
        }

    def test_reports_unreachable_database(self, app: FastAPI) -> None:
        broken = MagicMock(spec=Session)
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        app.dependency_overrides[get_db] = lambda: broken

        body = TestClient(app).get("/health").json()

        assert body["status"] == "degraded"
        assert body["database"]["connected"] is False
        assert "connection refused" in body["database"]["error"]


class TestImportEndpoints:
    def test_import_html(self, client: TestClient) -> None:
        response = client.post("/imports/html", json={"html_data": BASIC_TABLE_HTML})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["imported_rows"] == 2
        assert body["imported_records"][0]["date"] == "2024-01-15"
        assert body["imported_records"][0]["sale_price"] == "899.99"
        assert body["imported_records"][0]["id"] is not None

    def test_import_structural_failure_is_400(self, client: TestClient) -> None:
        response = client.post("/imports/html", json={"html_data": "<div>nothing</div>"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "no_table_found"

    def test_import_unknown_positional_field_is_400(self, client: TestClient) -> None:
        response = client.post(
            "/imports/html",
            json={"html_data": CONSIGNABLE_ROWS_HTML, "options": {"custom_column_mapping": ["price"]}},
        )

        assert response.status_code == 400

    def test_validate_does_not_persist(self, client: TestClient) -> None:
        response = client.post("/imports/html/validate", json={"html_data": BASIC_TABLE_HTML})

        assert response.status_code == 200
        assert response.json()["valid"] is True
        assert client.get("/records").json()["total"] == 0

    def test_validate_reports_mapping_failure(self, client: TestClient) -> None:
        html = "<table><tr><th>Store</th></tr><tr><td>A</td></tr></table>"

        body = client.post("/imports/html/validate", json={"html_data": html}).json()

        assert body["valid"] is False
        assert body["error_details"]["code"] == "column_mapping"

    def test_issue_truncation_counts_are_reported(self, client: TestClient) -> None:
        body = client.post("/imports/html/validate", json={"html_data": BASIC_TABLE_HTML}).json()

        assert body["errors_truncated"] == 0
        assert body["warnings_truncated"] == 0

    def test_recent_imports_newest_first(self, imported: TestClient) -> None:
        body = imported.get("/imports/recent", params={"limit": 2}).json()

        assert [record["store"] for record in body] == ["Westside Store", "Mall Outlet"]

    def test_statistics(self, imported: TestClient) -> None:
        body = imported.get("/imports/statistics").json()

        assert body["total_records"] == 5
        assert body["total_sales"] == "6848.48"


class TestRecordsEndpoint:
    def test_filters_and_paging(self, imported: TestClient) -> None:
        body = imported.get("/records", params={"store": "Mall Location"}).json()

        assert body["total"] == 1
        assert body["records"][0]["vendor"] == "Home & Garden"

    def test_sort_and_limit(self, imported: TestClient) -> None:
        body = imported.get("/records", params={"sort_by": "sale_price", "sort_order": "asc", "limit": 2}).json()

        assert body["total"] == 5
        assert [record["sale_price"] for record in body["records"]] == ["899.50", "899.99"]

    def test_invalid_sort_is_400(self, imported: TestClient) -> None:
        assert imported.get("/records", params={"sort_by": "description"}).status_code == 400

    def test_get_update_delete_record(self, imported: TestClient) -> None:
        record_id = imported.get("/records", params={"store": "Mall Location"}).json()["records"][0]["id"]

        assert imported.get(f"/records/{record_id}").json()["vendor"] == "Home & Garden"

        response = imported.patch(f"/records/{record_id}", json={"sale_price": "1199.00", "date": "2024-01-20"})
        assert response.status_code == 200
        assert response.json()["sale_price"] == "1199.00"
        assert response.json()["date"] == "2024-01-20"
        assert response.json()["store"] == "Mall Location"

        assert imported.delete(f"/records/{record_id}").status_code == 204
        assert imported.get(f"/records/{record_id}").status_code == 404
        assert imported.get("/records").json()["total"] == 4

    def test_missing_record_is_404(self, client: TestClient) -> None:
        assert client.get("/records/999").status_code == 404
        assert client.patch("/records/999", json={"store": "X"}).status_code == 404
        assert client.delete("/records/999").status_code == 404

    def test_negative_price_update_is_rejected(self, imported: TestClient) -> None:
        record_id = imported.get("/records").json()["records"][0]["id"]

        assert imported.patch(f"/records/{record_id}", json={"sale_price": "-1"}).status_code == 422


class TestReportEndpoints:
    def test_yearly(self, imported: TestClient) -> None:
        body = imported.get("/reports/yearly").json()

        assert [node["period"] for node in body] == ["2024"]
        assert body[0]["items_sold"] == 5

    def test_monthly(self, imported: TestClient) -> None:
        body = imported.get("/reports/monthly", params={"year": "2024"}).json()

        assert [node["period"] for node in body] == ["2024-03", "2024-01"]

    def test_daily(self, imported: TestClient) -> None:
        body = imported.get("/reports/daily", params={"year": "2024", "month": "3"}).json()

        assert [node["period"] for node in body] == ["2024-03-17", "2024-03-16", "2024-03-15"]

    def test_drill_down(self, imported: TestClient) -> None:
        body = imported.get("/reports/drill-down", params={"year": "2024", "month": "01"}).json()

        assert body["month"] == "01"
        assert [record["store"] for record in body["records"]] == ["Mall Location", "Downtown Store"]

    def test_invalid_period_is_400(self, imported: TestClient) -> None:
        response = imported.get("/reports/drill-down", params={"year": "2024", "month": "13"})

        assert response.status_code == 400
        assert response.json()["detail"]["parameter"] == "month"

    def test_pivot(self, imported: TestClient) -> None:
        body = imported.get("/reports/pivot").json()

        assert len(body["yearly"]) == 1
        assert len(body["monthly"]) == 2
        assert len(body["daily"]) == 5

    def test_store_performance(self, imported: TestClient) -> None:
        body = imported.get("/reports/stores").json()

        assert body[0]["name"] == "Westside Store"

    def test_custom_summary(self, imported: TestClient) -> None:
        body = imported.get("/reports/custom", params={"group_by": "vendor"}).json()

        assert len(body) == 5
        assert all(node["year"] is None for node in body)
