"""
core/queries.py
---------------
Catalog SQL used by the loader and the file storage analyzer.

All values are bound by name (``:owner``, ``:table_name``). Identifiers are
only interpolated by :func:`sample_values_sql`, and only after quoting.
"""
from __future__ import annotations

# Large-object and binary column types considered "blob-like".
BLOB_TYPES: tuple[str, ...] = ("BLOB", "CLOB", "NCLOB", "BFILE", "RAW", "LONG RAW")

# Subset whose declared length feeds the size estimate.
SIZED_BLOB_TYPES: tuple[str, ...] = ("BLOB", "CLOB", "RAW")


def _in_list(values: tuple[str, ...]) -> str:
    return ", ".join(f"'{v}'" for v in values)


LIST_TABLES = """
SELECT table_name, num_rows
FROM all_tables
WHERE owner = :owner
ORDER BY table_name
"""

LIST_COLUMNS = """
SELECT column_name, data_type, data_length, nullable,
       data_precision, data_scale, column_id
FROM all_tab_columns
WHERE owner = :owner AND table_name = :table_name
ORDER BY column_id
"""

LIST_INDEXES = """
SELECT index_name, uniqueness
FROM all_indexes
WHERE table_owner = :owner AND table_name = :table_name
"""

LIST_VIEWS = """
SELECT view_name
FROM all_views
WHERE owner = :owner
ORDER BY view_name
"""

LIST_BLOB_TABLES = f"""
SELECT t.table_name,
       LISTAGG(c.column_name || ':' || c.data_type, ', ')
         WITHIN GROUP (ORDER BY c.column_id) AS blob_columns,
       COUNT(c.column_name) AS blob_count
FROM all_tables t
JOIN all_tab_columns c ON t.owner = c.owner AND t.table_name = c.table_name
WHERE t.owner = :owner
  AND c.data_type IN ({_in_list(BLOB_TYPES)})
GROUP BY t.table_name
ORDER BY blob_count DESC
"""

ESTIMATE_BLOB_BYTES = f"""
SELECT SUM(data_length) AS total_bytes
FROM all_tab_columns
WHERE owner = :owner AND table_name = :table_name
  AND data_type IN ({_in_list(SIZED_BLOB_TYPES)})
"""

TABLE_ROW_COUNT = """
SELECT num_rows
FROM all_tables
WHERE owner = :owner AND table_name = :table_name
"""

FILENAME_COLUMNS = f"""
SELECT column_name
FROM all_tab_columns
WHERE owner = :owner AND table_name = :table_name
  AND data_type NOT IN ({_in_list(BLOB_TYPES)})
  AND (column_name LIKE '%NOMBRE%'
       OR column_name LIKE '%FILE%'
       OR column_name LIKE '%ARCHIVO%'
       OR data_type LIKE '%CHAR%')
ORDER BY column_id
"""


def quote_identifier(name: str) -> str:
    """Quote an Oracle identifier exactly as the catalog reports it."""
    return '"' + name.replace('"', '""') + '"'


def sample_values_sql(owner: str, table_name: str, column_name: str, limit: int) -> str:
    """
    Build the query reading distinct non-null values of one column.

    This is the only query that touches table data rather than the catalog.
    """
    col = quote_identifier(column_name)
    return (
        f"SELECT DISTINCT {col} AS sample_value "
        f"FROM {quote_identifier(owner)}.{quote_identifier(table_name)} "
        f"WHERE {col} IS NOT NULL AND ROWNUM <= {int(limit)}"
    )
