"""models/__init__.py"""
from models.schema import (
    ColumnInfo,
    IndexInfo,
    TableInfo,
    TableDetails,
    SchemaSnapshot,
    DatabaseInfo,
)
from models.analysis import (
    RiskLevel,
    Complexity,
    ColumnDiff,
    TableComparison,
    SchemaComparison,
    TableWithFiles,
    FileStorageAnalysis,
    MigrationAnalysis,
    MigrationReport,
)

__all__ = [
    "ColumnInfo",
    "IndexInfo",
    "TableInfo",
    "TableDetails",
    "SchemaSnapshot",
    "DatabaseInfo",
    "RiskLevel",
    "Complexity",
    "ColumnDiff",
    "TableComparison",
    "SchemaComparison",
    "TableWithFiles",
    "FileStorageAnalysis",
    "MigrationAnalysis",
    "MigrationReport",
]
