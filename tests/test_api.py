"""
tests/test_api.py
-----------------
HTTP surface tests with the catalog replaced by the in-memory fake.
Run with: python -m pytest tests/
"""
from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from core import queries
from core.catalog import CatalogConnectionError
from fakes import FakeCatalogReader
from models.schema import DatabaseInfo
from services.api.dependencies import get_catalog_reader
from services.api.main import app


@pytest.fixture
def client(hr_reader: FakeCatalogReader) -> Iterator[TestClient]:
    app.dependency_overrides[get_catalog_reader] = lambda: hr_reader
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class TestServiceEndpoints:
    def test_root(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "operational"

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json()["status"] == "healthy"


class TestSchemaEndpoints:
    def test_schema(self, client: TestClient) -> None:
        resp = client.get("/schema", params={"owner": "hr"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["owner"] == "HR"
        assert body["total_tables"] == 4
        assert "GHOST" not in body["table_details"]
        assert body["unresolved_tables"] == ["GHOST"]

    def test_schema_requires_owner(self, client: TestClient) -> None:
        assert client.get("/schema").status_code == 422

    def test_table_details(self, client: TestClient) -> None:
        resp = client.get("/table-details", params={"owner": "HR", "table": "EMPLOYEES"})
        assert resp.status_code == 200
        assert [c["name"] for c in resp.json()["columns"]][:2] == ["ID", "NAME"]

    def test_table_details_not_found(self, client: TestClient) -> None:
        resp = client.get("/table-details", params={"owner": "HR", "table": "GHOST"})
        assert resp.status_code == 404

    def test_compare(self, client: TestClient) -> None:
        resp = client.post("/compare", json={"schema1": "HR", "schema2": "HR_V2"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["only_in_schema2"] == ["AUDIT_LOG"]
        assert list(body["table_differences"]) == ["EMPLOYEES"]
        assert body["identical"] is False

    def test_migration(self, client: TestClient) -> None:
        body = client.get("/migration", params={"owner": "HR"}).json()
        assert body["analysis"]["type_mappings"]["DEPARTMENTS.NAME"] == "VARCHAR2 → VARCHAR(100)"

    def test_file_analysis(self, client: TestClient) -> None:
        body = client.get("/file-analysis", params={"owner": "HR"}).json()
        assert body["analysis"]["tables_with_files"][0]["table_name"] == "EMPLOYEES"

    def test_report(self, client: TestClient) -> None:
        body = client.get("/report", params={"owner": "HR", "compare_with": "HR_V2"}).json()
        assert body["comparison"]["schema2_name"] == "HR_V2"


class TestErrorMapping:
    def test_failed_table_listing_is_502(self, client: TestClient, hr_reader: FakeCatalogReader) -> None:
        hr_reader.failures.add((queries.LIST_TABLES, None))
        resp = client.get("/schema", params={"owner": "HR"})
        assert resp.status_code == 502
        assert "simulated failure" in resp.json()["detail"]

    def test_missing_metadata_is_503(self, client: TestClient) -> None:
        resp = client.get("/database-info")
        assert resp.status_code == 503

    def test_database_info(self, client: TestClient, hr_reader: FakeCatalogReader) -> None:
        hr_reader.info = DatabaseInfo("Oracle", "21c", "python-oracledb", "2.0.0", "db/XE", "HR")
        assert client.get("/database-info").json()["database_product_name"] == "Oracle"

    def test_connection_failure_is_503(self) -> None:
        def unreachable() -> Iterator[FakeCatalogReader]:
            raise CatalogConnectionError("listener down")
            yield  # pragma: no cover

        app.dependency_overrides[get_catalog_reader] = unreachable
        try:
            resp = TestClient(app).get("/schema", params={"owner": "HR"})
        finally:
            app.dependency_overrides.clear()
        assert resp.status_code == 503
