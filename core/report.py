"""
core/report.py
--------------
Single entry point composing the loader, comparator and analyzers.

Design Decision:
    The facade is a plain class with one injected :class:`CatalogReader`.
    It keeps no state between calls, so every operation reads the catalog
    afresh and two calls never share a snapshot.
"""
from __future__ import annotations

from core.catalog import CatalogReader, normalize_identifier
from core.file_storage import FileStorageAnalyzer
from core.schema_comparator import SchemaComparator
from core.schema_loader import SchemaLoader
from core.type_mapper import MigrationAnalyzer
from logger import get_logger
from models.analysis import (
    FileStorageAnalysis,
    MigrationAnalysis,
    MigrationReport,
    SchemaComparison,
)
from models.schema import DatabaseInfo, SchemaSnapshot, TableDetails

log = get_logger(__name__)


class SchemaIntelligence:
    """
    Read-only schema introspection and migration advice.

    Example::

        with OracleCatalogReader.from_config() as reader:
            intel = SchemaIntelligence(reader)
            report = intel.build_report("hr", compare_with="hr_v2")
            json.dumps(report.to_dict())
    """

    def __init__(self, reader: CatalogReader) -> None:
        self._reader = reader
        self.loader = SchemaLoader(reader)
        self.file_storage = FileStorageAnalyzer(reader)
        self.migration = MigrationAnalyzer(self.file_storage)
        self.comparator = SchemaComparator(self.loader, self.migration)

    def get_database_info(self) -> DatabaseInfo:
        """Raises :class:`CatalogConnectionError` when metadata is unavailable."""
        return self._reader.database_info()

    def load_schema(self, owner: str) -> SchemaSnapshot:
        return self.loader.load_schema(owner)

    def get_table_details(self, owner: str, table_name: str) -> TableDetails | None:
        return self.loader.get_table_details(owner, table_name)

    def compare_schemas(self, schema1: str, schema2: str) -> SchemaComparison:
        return self.comparator.compare(schema1, schema2)

    def analyze_migration(self, schema: SchemaSnapshot) -> MigrationAnalysis:
        return self.migration.analyze_migration(schema)

    def analyze_file_storage(self, owner: str) -> FileStorageAnalysis:
        return self.file_storage.analyze_file_storage(owner)

    def build_report(self, owner: str, compare_with: str | None = None) -> MigrationReport:
        """
        Load *owner*, analyze it and optionally diff it against *compare_with*.

        When a comparison is requested its embedded analysis is reused, so
        the owner's migration analysis runs once.
        """
        if compare_with:
            comparison = self.compare_schemas(owner, compare_with)
            schema = comparison.schema1
            analysis = comparison.migration_analysis
        else:
            comparison = None
            schema = self.load_schema(owner)
            analysis = self.analyze_migration(schema)

        log.info("Built report for %s.", normalize_identifier(owner))
        return MigrationReport(
            owner=schema.owner,
            schema=schema,
            migration_analysis=analysis,
            comparison=comparison,
        )
