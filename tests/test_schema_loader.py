"""
tests/test_schema_loader.py
---------------------------
Unit tests for core/schema_loader.py.
Run with: python -m pytest tests/
"""
from __future__ import annotations

import pytest

from core import queries
from core.catalog import CatalogError, CatalogRowError
from core.schema_loader import SchemaLoader, decode_column, decode_table
from fakes import FakeCatalogReader, FakeSchema, FakeTable, col


@pytest.fixture
def loader(hr_reader: FakeCatalogReader) -> SchemaLoader:
    return SchemaLoader(hr_reader)


class TestRowDecoding:
    def test_column_row(self) -> None:
        c = decode_column({
            "COLUMN_NAME": "SALARY", "DATA_TYPE": "NUMBER", "DATA_LENGTH": 22,
            "DATA_PRECISION": 10, "DATA_SCALE": 2, "NULLABLE": "N",
        })
        assert (c.name, c.type, c.length, c.precision, c.scale) == ("SALARY", "NUMBER", 22, 10, 2)
        assert c.nullable is False

    def test_missing_statistics_become_zero(self) -> None:
        assert decode_table({"TABLE_NAME": "T", "NUM_ROWS": None}).row_count == 0

    def test_decimal_values_are_ints(self) -> None:
        from decimal import Decimal
        assert decode_table({"TABLE_NAME": "T", "NUM_ROWS": Decimal("12")}).row_count == 12

    def test_malformed_row_raises(self) -> None:
        with pytest.raises(CatalogRowError):
            decode_column({"COLUMN_NAME": None, "DATA_TYPE": "NUMBER"})


class TestLoadSchema:
    def test_owner_is_upper_cased(self, loader: SchemaLoader, hr_reader: FakeCatalogReader) -> None:
        snapshot = loader.load_schema("hr")
        assert snapshot.owner == "HR"
        assert all(params.get("owner") == "HR" for _, params in hr_reader.calls)

    def test_tables_ordered_by_name(self, loader: SchemaLoader) -> None:
        snapshot = loader.load_schema("HR")
        assert snapshot.table_names == ["DEPARTMENTS", "EMPLOYEES", "GHOST", "LEGACY"]
        assert snapshot.total_tables == 4

    def test_columns_in_catalog_order(self, loader: SchemaLoader) -> None:
        emp = loader.load_schema("HR").table_details["EMPLOYEES"]
        assert [c.name for c in emp.columns] == ["ID", "NAME", "SALARY", "HIRED", "PHOTO"]
        assert {i.signature for i in emp.indexes} == {"PK_EMP:UNIQUE", "IDX_EMP_NAME:NONUNIQUE"}

    def test_table_without_columns_is_unresolved(self, loader: SchemaLoader) -> None:
        snapshot = loader.load_schema("HR")
        assert "GHOST" in snapshot.table_names
        assert "GHOST" not in snapshot.table_details
        assert snapshot.unresolved_tables == ["GHOST"]

    def test_details_are_subset_of_tables(self, loader: SchemaLoader) -> None:
        snapshot = loader.load_schema("HR")
        assert set(snapshot.table_details) <= set(snapshot.table_names)

    def test_views(self, loader: SchemaLoader) -> None:
        snapshot = loader.load_schema("HR_V2")
        assert snapshot.views == ("DEPT_VIEW", "EMP_VIEW")
        assert snapshot.total_views == 2

    def test_repeated_loads_are_equal(self, loader: SchemaLoader) -> None:
        assert loader.load_schema("HR") == loader.load_schema("HR")

    def test_unknown_owner_is_empty(self, loader: SchemaLoader) -> None:
        snapshot = loader.load_schema("NOBODY")
        assert snapshot.total_tables == 0
        assert snapshot.table_details == {}


class TestFailurePolicy:
    def test_listing_tables_failure_propagates(self) -> None:
        reader = FakeCatalogReader(
            {"HR": FakeSchema()}, failures={(queries.LIST_TABLES, None)}
        )
        with pytest.raises(CatalogError):
            SchemaLoader(reader).load_schema("HR")

    def test_column_failure_skips_only_that_table(self) -> None:
        schema = FakeSchema(tables={
            "A": FakeTable(columns=[col("ID", "NUMBER")]),
            "B": FakeTable(columns=[col("ID", "NUMBER")]),
        })
        reader = FakeCatalogReader({"HR": schema}, failures={(queries.LIST_COLUMNS, "A")})
        snapshot = SchemaLoader(reader).load_schema("HR")
        assert snapshot.table_names == ["A", "B"]
        assert list(snapshot.table_details) == ["B"]

    def test_index_failure_skips_table(self) -> None:
        schema = FakeSchema(tables={"A": FakeTable(columns=[col("ID", "NUMBER")])})
        reader = FakeCatalogReader({"HR": schema}, failures={(queries.LIST_INDEXES, "A")})
        assert SchemaLoader(reader).load_schema("HR").table_details == {}

    def test_view_failure_yields_no_views(self) -> None:
        schema = FakeSchema(tables={"A": FakeTable(columns=[col("ID", "NUMBER")])}, views=["V"])
        reader = FakeCatalogReader({"HR": schema}, failures={(queries.LIST_VIEWS, None)})
        snapshot = SchemaLoader(reader).load_schema("HR")
        assert snapshot.views == ()
        assert "A" in snapshot.table_details


class TestGetTableDetails:
    def test_found(self, loader: SchemaLoader) -> None:
        details = loader.get_table_details("hr", "departments")
        assert details is not None
        assert details.name == "departments"
        assert [(c.name, c.length) for c in details.columns] == [("ID", 22), ("NAME", 100)]

    def test_missing_table_is_none(self, loader: SchemaLoader) -> None:
        assert loader.get_table_details("HR", "NOPE") is None
