"""core/__init__.py"""
from core.catalog import (
    CatalogReader,
    OracleCatalogReader,
    CatalogError,
    CatalogConnectionError,
    CatalogRowError,
    Fetch,
)
from core.schema_loader import SchemaLoader
from core.schema_comparator import SchemaComparator, compare_columns, compare_indexes
from core.type_mapper import MigrationAnalyzer, map_type
from core.file_storage import FileStorageAnalyzer, calculate_risk_level, detect_file_types
from core.report import SchemaIntelligence

__all__ = [
    "CatalogReader",
    "OracleCatalogReader",
    "CatalogError",
    "CatalogConnectionError",
    "CatalogRowError",
    "Fetch",
    "SchemaLoader",
    "SchemaComparator",
    "compare_columns",
    "compare_indexes",
    "MigrationAnalyzer",
    "map_type",
    "FileStorageAnalyzer",
    "calculate_risk_level",
    "detect_file_types",
    "SchemaIntelligence",
]
