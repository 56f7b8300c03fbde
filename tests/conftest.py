"""
tests/conftest.py
-----------------
Shared fixtures: two versions of a small HR schema in a fake catalog.
"""
from __future__ import annotations

import pytest

from core.report import SchemaIntelligence
from fakes import FakeCatalogReader, FakeSchema, FakeTable, col, idx


def _hr() -> FakeSchema:
    return FakeSchema(
        tables={
            "DEPARTMENTS": FakeTable(
                columns=[
                    col("ID", "NUMBER", 22, precision=10, scale=0, nullable=False),
                    col("NAME", "VARCHAR2", 100),
                ],
                indexes=[idx("PK_DEPT", unique=True)],
                num_rows=27,
            ),
            "EMPLOYEES": FakeTable(
                columns=[
                    col("ID", "NUMBER", 22, precision=10, scale=0, nullable=False),
                    col("NAME", "VARCHAR2", 100),
                    col("SALARY", "NUMBER", 22, precision=10, scale=2),
                    col("HIRED", "DATE", 7),
                    col("PHOTO", "BLOB", 4000),
                ],
                indexes=[idx("PK_EMP", unique=True), idx("IDX_EMP_NAME")],
                num_rows=107,
            ),
            "LEGACY": FakeTable(columns=[col("NOTES", "LONG", 0)], num_rows=None),
            "GHOST": FakeTable(columns=[]),
        },
        views=["EMP_VIEW"],
    )


def _hr_v2() -> FakeSchema:
    return FakeSchema(
        tables={
            "DEPARTMENTS": FakeTable(
                columns=[
                    col("ID", "NUMBER", 22, precision=10, scale=0, nullable=False),
                    col("NAME", "VARCHAR2", 100),
                ],
                indexes=[idx("PK_DEPT", unique=True)],
                num_rows=30,
            ),
            "EMPLOYEES": FakeTable(
                columns=[
                    col("ID", "NUMBER", 22, precision=10, scale=0, nullable=False),
                    col("NAME", "VARCHAR2", 200),
                    col("SALARY", "NUMBER", 22, precision=12, scale=2),
                    col("HIRED", "TIMESTAMP(6)", 11, nullable=False),
                    col("EMAIL", "VARCHAR2", 255),
                ],
                indexes=[idx("PK_EMP", unique=True), idx("IDX_EMP_NAME", unique=True)],
                num_rows=110,
            ),
            "AUDIT_LOG": FakeTable(columns=[col("ID", "NUMBER", 22)]),
            "GHOST": FakeTable(columns=[]),
        },
        views=["EMP_VIEW", "DEPT_VIEW"],
    )


@pytest.fixture
def hr_reader() -> FakeCatalogReader:
    return FakeCatalogReader({"HR": _hr(), "HR_V2": _hr_v2()})


@pytest.fixture
def intel(hr_reader: FakeCatalogReader) -> SchemaIntelligence:
    return SchemaIntelligence(hr_reader)
