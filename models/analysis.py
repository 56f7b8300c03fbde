"""
models/analysis.py
------------------
Result types produced by the comparator and the migration analyzers.

Every aggregate exposes ``to_dict()`` so callers can hand it straight to a
JSON encoder or a template.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from models.schema import SchemaSnapshot


class RiskLevel(str, Enum):
    """Likelihood that a table is being used as ad-hoc file storage."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Complexity(str, Enum):
    """Migration effort tier, derived from table count."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


# ---------------------------------------------------------------------------
# Structural comparison
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ColumnDiff:
    column_name: str
    difference: str
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_name": self.column_name,
            "difference": self.difference,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class TableComparison:
    column_differences: tuple[ColumnDiff, ...] = ()
    index_differences: tuple[str, ...] = ()

    @property
    def has_differences(self) -> bool:
        return bool(self.column_differences or self.index_differences)

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_differences": [d.to_dict() for d in self.column_differences],
            "index_differences": list(self.index_differences),
        }


# ---------------------------------------------------------------------------
# File storage analysis
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TableWithFiles:
    """
    A table holding large-object columns, scored for file-storage risk.

    Attributes:
        blob_columns:        ``"NAME:TYPE"`` descriptors in column order.
        estimated_size_mb:   Whole megabytes, derived from declared lengths.
        detected_file_types: Content tags guessed from column names, or
                             ``("BINARY",)`` when nothing matched.
        sample_filenames:    Up to five values from a filename-like column.
    """
    table_name: str
    blob_column_count: int
    blob_columns: tuple[str, ...]
    estimated_size_mb: int
    detected_file_types: tuple[str, ...]
    row_count: int
    sample_filenames: tuple[str, ...]
    risk_level: RiskLevel

    def to_dict(self) -> dict[str, Any]:
        return {
            "table_name": self.table_name,
            "blob_column_count": self.blob_column_count,
            "blob_columns": list(self.blob_columns),
            "estimated_size_mb": self.estimated_size_mb,
            "detected_file_types": list(self.detected_file_types),
            "row_count": self.row_count,
            "sample_filenames": list(self.sample_filenames),
            "risk_level": self.risk_level.value,
        }


@dataclass(frozen=True)
class FileStorageAnalysis:
    tables_with_files: tuple[TableWithFiles, ...] = ()
    estimated_total_size_mb: int = 0
    recommendations: tuple[str, ...] = ()
    file_type_distribution: dict[str, int] = field(default_factory=dict)

    @property
    def total_tables_with_files(self) -> int:
        return len(self.tables_with_files)

    @property
    def estimated_total_size_gb(self) -> float:
        return self.estimated_total_size_mb / 1024.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "tables_with_files": [t.to_dict() for t in self.tables_with_files],
            "total_tables_with_files": self.total_tables_with_files,
            "estimated_total_size_mb": self.estimated_total_size_mb,
            "recommendations": list(self.recommendations),
            "file_type_distribution": dict(self.file_type_distribution),
        }


# ---------------------------------------------------------------------------
# Migration analysis
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MigrationAnalysis:
    """
    Outcome of mapping one schema onto the target engine.

    ``compatible`` is True exactly when ``compatibility_issues`` is empty.
    """
    compatibility_issues: tuple[str, ...]
    type_mappings: dict[str, str]
    recommendations: tuple[str, ...]
    estimated_complexity: Complexity
    file_storage_analysis: FileStorageAnalysis

    @property
    def compatible(self) -> bool:
        return not self.compatibility_issues

    def to_dict(self) -> dict[str, Any]:
        return {
            "compatible": self.compatible,
            "compatibility_issues": list(self.compatibility_issues),
            "type_mappings": dict(self.type_mappings),
            "recommendations": list(self.recommendations),
            "estimated_complexity": self.estimated_complexity.value,
            "file_storage_analysis": self.file_storage_analysis.to_dict(),
        }


@dataclass(frozen=True)
class SchemaComparison:
    """
    Structural diff of two schemas.

    ``migration_analysis`` is computed against ``schema1`` only.
    """
    schema1_name: str
    schema2_name: str
    schema1: SchemaSnapshot
    schema2: SchemaSnapshot
    only_in_schema1: tuple[str, ...]
    only_in_schema2: tuple[str, ...]
    table_differences: dict[str, TableComparison]
    migration_analysis: MigrationAnalysis

    @property
    def identical(self) -> bool:
        return not (self.only_in_schema1 or self.only_in_schema2 or self.table_differences)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema1_name": self.schema1_name,
            "schema2_name": self.schema2_name,
            "schema1": self.schema1.to_dict(),
            "schema2": self.schema2.to_dict(),
            "only_in_schema1": list(self.only_in_schema1),
            "only_in_schema2": list(self.only_in_schema2),
            "identical": self.identical,
            "table_differences": {k: v.to_dict() for k, v in self.table_differences.items()},
            "migration_analysis": self.migration_analysis.to_dict(),
        }


@dataclass(frozen=True)
class MigrationReport:
    """Everything known about one owner, composed by the report assembler."""
    owner: str
    schema: SchemaSnapshot
    migration_analysis: MigrationAnalysis
    comparison: SchemaComparison | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner": self.owner,
            "schema": self.schema.to_dict(),
            "migration_analysis": self.migration_analysis.to_dict(),
            "comparison": self.comparison.to_dict() if self.comparison else None,
        }
