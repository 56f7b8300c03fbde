"""
core/type_mapper.py
-------------------
Oracle → PostgreSQL type mapping and compatibility analysis.

Every column maps to exactly one target type. Rules are matched by
case-insensitive substring, in priority order; the first hit wins:

    VARCHAR2   → VARCHAR(length, or 255 when unknown)
    NUMBER     → NUMERIC(p,s) / NUMERIC(p) / NUMERIC
    DATE       → TIMESTAMP
    TIMESTAMP  → TIMESTAMP
    CLOB       → TEXT
    BLOB       → BYTEA
    RAW        → BYTEA
    (other)    → TEXT

Design Decision:
    The rule table is data, not an if/else chain, so the priority order is
    visible in one place and each rule is testable through :func:`map_type`.
"""
from __future__ import annotations

from typing import Callable

from core.file_storage import FileStorageAnalyzer
from logger import get_logger
from models.analysis import Complexity, MigrationAnalysis
from models.schema import ColumnInfo, SchemaSnapshot

log = get_logger(__name__)

# Oracle's maximum NUMBER precision, used when only a scale is declared.
_MAX_NUMBER_PRECISION = 38
_DEFAULT_VARCHAR_LENGTH = 255
_RAW_LENGTH_LIMIT = 1000


def _varchar_target(column: ColumnInfo) -> str:
    length = column.length if column.length is not None else _DEFAULT_VARCHAR_LENGTH
    return f"VARCHAR({length})"


def _numeric_target(column: ColumnInfo) -> str:
    if column.scale is not None and column.scale > 0:
        precision = column.precision if column.precision is not None else _MAX_NUMBER_PRECISION
        return f"NUMERIC({precision},{column.scale})"
    if column.precision is not None:
        return f"NUMERIC({column.precision})"
    return "NUMERIC"


_TYPE_RULES: tuple[tuple[str, Callable[[ColumnInfo], str]], ...] = (
    ("VARCHAR2", _varchar_target),
    ("NUMBER", _numeric_target),
    ("DATE", lambda _: "TIMESTAMP"),
    ("TIMESTAMP", lambda _: "TIMESTAMP"),
    ("CLOB", lambda _: "TEXT"),
    ("BLOB", lambda _: "BYTEA"),
    ("RAW", lambda _: "BYTEA"),
)
_FALLBACK_TARGET = "TEXT"


def map_type(column: ColumnInfo) -> str:
    """
    Return the PostgreSQL type for *column*.

    Examples::

        map_type(ColumnInfo("N", "VARCHAR2", length=100))             → "VARCHAR(100)"
        map_type(ColumnInfo("P", "NUMBER", precision=10, scale=2))    → "NUMERIC(10,2)"
        map_type(ColumnInfo("X", "XMLTYPE"))                          → "TEXT"
    """
    source = column.type.upper()
    for keyword, target in _TYPE_RULES:
        if keyword in source:
            return target(column)
    return _FALLBACK_TARGET


def column_issues(table_name: str, column: ColumnInfo) -> tuple[list[str], list[str]]:
    """
    Return ``(issues, recommendations)`` raised by one column.

    A column may raise several issues; nothing is deduplicated.
    """
    source = column.type.upper()
    ref = f"{table_name}.{column.name}"
    issues: list[str] = []
    recommendations: list[str] = []

    if "LONG" in source:
        issues.append(f"Table {ref}: LONG type is obsolete, use CLOB/TEXT")
    if "RAW" in source and column.length is not None and column.length > _RAW_LENGTH_LIMIT:
        issues.append(f"Table {ref}: RAW column too long, consider BYTEA/BLOB")
    if "BLOB" in source or "CLOB" in source:
        issues.append(f"ALERT: Table {ref}: contains binary files ({source})")
        recommendations.append(f"Evaluate moving the files in {ref} to external storage")
    return issues, recommendations


def estimate_complexity(total_tables: int) -> Complexity:
    if total_tables > 100:
        return Complexity.HIGH
    if total_tables > 50:
        return Complexity.MEDIUM
    return Complexity.LOW


class MigrationAnalyzer:
    """
    Maps a snapshot onto PostgreSQL and collects compatibility hazards.

    Args:
        file_storage: Analyzer run for the same owner and merged into the
                      result.
    """

    def __init__(self, file_storage: FileStorageAnalyzer) -> None:
        self._file_storage = file_storage

    def analyze_migration(self, schema: SchemaSnapshot) -> MigrationAnalysis:
        issues: list[str] = []
        recommendations: list[str] = []
        type_mappings: dict[str, str] = {}

        for table in schema.table_details.values():
            for column in table.columns:
                type_mappings[f"{table.name}.{column.name}"] = (
                    f"{column.type.upper()} → {map_type(column)}"
                )
                col_issues, col_recs = column_issues(table.name, column)
                issues.extend(col_issues)
                recommendations.extend(col_recs)

        file_analysis = self._file_storage.analyze_file_storage(schema.owner)
        recommendations.extend(file_analysis.recommendations)
        if file_analysis.total_tables_with_files > 0:
            issues.append(
                f"Detected {file_analysis.total_tables_with_files} tables with file storage "
                f"({file_analysis.estimated_total_size_gb:.2f} GB)"
            )

        recommendations.extend([
            f"Total tables to migrate: {schema.total_tables}",
            f"Total views to migrate: {schema.total_views}",
            "Consider sequences or identity columns for auto-increment columns",
            "Review stored procedures and functions separately",
        ])

        analysis = MigrationAnalysis(
            compatibility_issues=tuple(issues),
            type_mappings=type_mappings,
            recommendations=tuple(recommendations),
            estimated_complexity=estimate_complexity(schema.total_tables),
            file_storage_analysis=file_analysis,
        )
        log.info(
            "Migration analysis for %s: %d mapping(s), %d issue(s), complexity %s.",
            schema.owner, len(type_mappings), len(issues), analysis.estimated_complexity.value,
        )
        return analysis
