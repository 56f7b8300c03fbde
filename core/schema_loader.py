"""
core/schema_loader.py
---------------------
Builds :class:`SchemaSnapshot` objects from catalog queries.

Design Decisions:
    * Failing to list an owner's tables is fatal; the error propagates.
    * Failing to resolve one table (columns or indexes) is not. The table
      stays in ``tables`` but is left out of ``table_details`` and a warning
      is logged.
    * A table with no visible columns is reported as unresolved (``None``),
      never as an empty table.
    * One query per table for columns and one for indexes. This is a known
      latency cost on large schemas.
"""
from __future__ import annotations

from core import queries
from core.catalog import (
    CatalogReader,
    Fetch,
    Row,
    attempt,
    normalize_identifier,
    row_int,
    row_str,
)
from logger import get_logger
from models.schema import (
    ColumnInfo,
    IndexInfo,
    SchemaSnapshot,
    TableDetails,
    TableInfo,
)

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Row decoders
# ---------------------------------------------------------------------------

def decode_table(row: Row) -> TableInfo:
    return TableInfo(
        name=row_str(row, "TABLE_NAME"),
        row_count=row_int(row, "NUM_ROWS") or 0,
    )


def decode_column(row: Row) -> ColumnInfo:
    return ColumnInfo(
        name=row_str(row, "COLUMN_NAME"),
        type=row_str(row, "DATA_TYPE"),
        length=row_int(row, "DATA_LENGTH"),
        precision=row_int(row, "DATA_PRECISION"),
        scale=row_int(row, "DATA_SCALE"),
        nullable=row.get("NULLABLE") == "Y",
    )


def decode_index(row: Row) -> IndexInfo:
    return IndexInfo(
        name=row_str(row, "INDEX_NAME"),
        unique=row.get("UNIQUENESS") == "UNIQUE",
    )


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class SchemaLoader:
    """
    Reads one owner's tables, columns, indexes and views.

    Args:
        reader: Any :class:`CatalogReader`.

    Example::

        loader = SchemaLoader(reader)
        snapshot = loader.load_schema("hr")
        snapshot.owner            # "HR"
        snapshot.table_details["EMPLOYEES"].columns[0].name
    """

    def __init__(self, reader: CatalogReader) -> None:
        self._reader = reader

    def list_tables(self, owner: str) -> list[TableInfo]:
        """
        Return the owner's tables ordered by name.

        Raises:
            CatalogError: If the table listing fails.
        """
        rows = self._reader.query(
            queries.LIST_TABLES, {"owner": normalize_identifier(owner)}
        )
        return [decode_table(r) for r in rows]

    def list_views(self, owner: str) -> list[str]:
        rows = self._reader.query(
            queries.LIST_VIEWS, {"owner": normalize_identifier(owner)}
        )
        return [row_str(r, "VIEW_NAME") for r in rows]

    def fetch_table_details(self, owner: str, table_name: str) -> TableDetails | None:
        """
        Read columns and indexes of one table.

        Returns ``None`` when the catalog shows no columns for it.

        Raises:
            CatalogError: If either query fails or returns malformed rows.
        """
        params = {
            "owner": normalize_identifier(owner),
            "table_name": normalize_identifier(table_name),
        }
        columns = [decode_column(r) for r in self._reader.query(queries.LIST_COLUMNS, params)]
        if not columns:
            return None
        indexes = [decode_index(r) for r in self._reader.query(queries.LIST_INDEXES, params)]
        return TableDetails(name=table_name, columns=tuple(columns), indexes=tuple(indexes))

    def get_table_details(self, owner: str, table_name: str) -> TableDetails | None:
        """Like :meth:`fetch_table_details`, but query failures yield ``None``."""
        return self._resolve(owner, table_name, attempt(self.fetch_table_details, owner, table_name))

    def load_schema(self, owner: str) -> SchemaSnapshot:
        """
        Capture the full structure of *owner*.

        Raises:
            CatalogError: Only if listing the tables themselves fails.
        """
        owner = normalize_identifier(owner)
        tables = self.list_tables(owner)

        table_details: dict[str, TableDetails] = {}
        for table in tables:
            details = self.get_table_details(owner, table.name)
            if details is not None:
                table_details[table.name] = details

        views = self._resolve_views(owner, attempt(self.list_views, owner))

        snapshot = SchemaSnapshot(
            owner=owner,
            tables=tuple(tables),
            table_details=table_details,
            views=tuple(views),
        )
        log.info(
            "Loaded schema %s: %d table(s), %d unresolved, %d view(s).",
            owner, snapshot.total_tables, len(snapshot.unresolved_tables), snapshot.total_views,
        )
        return snapshot

    # ------------------------------------------------------------------
    # Recovery decisions
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve(owner: str, table_name: str, fetched: Fetch) -> TableDetails | None:
        if not fetched.ok:
            log.warning(
                "Could not load details for %s.%s: %s", owner, table_name, fetched.error
            )
            return None
        if fetched.value is None:
            log.warning("No visible columns for %s.%s; table skipped.", owner, table_name)
        return fetched.value

    @staticmethod
    def _resolve_views(owner: str, fetched: Fetch) -> list[str]:
        if not fetched.ok:
            log.warning("Could not list views for %s: %s", owner, fetched.error)
        return fetched.value_or([])
