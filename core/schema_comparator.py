"""
core/schema_comparator.py
-------------------------
Structural diff of two schema snapshots.

Design Decisions:
    * Pure functions over snapshots; :class:`SchemaComparator` only adds
      loading and the embedded migration analysis.
    * Set-derived outputs (tables only on one side, index differences) are
      sorted so results are reproducible.
    * Columns are compared on type (exact string), nullability and length.
      Precision and scale are intentionally left to the type mapper.
    * A table listed on both sides but unresolved on either is skipped.
"""
from __future__ import annotations

from core.schema_loader import SchemaLoader
from core.type_mapper import MigrationAnalyzer
from logger import get_logger
from models.analysis import ColumnDiff, SchemaComparison, TableComparison
from models.schema import ColumnInfo, IndexInfo, SchemaSnapshot

log = get_logger(__name__)

ONLY_IN_SCHEMA1 = "Present only in schema 1"
ONLY_IN_SCHEMA2 = "Present only in schema 2"


def compare_columns(
    cols1: tuple[ColumnInfo, ...] | list[ColumnInfo],
    cols2: tuple[ColumnInfo, ...] | list[ColumnInfo],
) -> list[ColumnDiff]:
    """
    Diff two column lists keyed by column name.

    Order: columns only in *cols1*, then only in *cols2*, then changed
    columns, each group in catalog order.

    Example::

        compare_columns([ColumnInfo("ID", "NUMBER", 22)],
                        [ColumnInfo("ID", "VARCHAR2", 22)])
        # [ColumnDiff("ID", "Type: NUMBER → VARCHAR2")]
    """
    map1 = {c.name: c for c in cols1}
    map2 = {c.name: c for c in cols2}
    diffs: list[ColumnDiff] = []

    for name in map1:
        if name not in map2:
            diffs.append(ColumnDiff(name, ONLY_IN_SCHEMA1))
    for name in map2:
        if name not in map1:
            diffs.append(ColumnDiff(name, ONLY_IN_SCHEMA2))

    for name, c1 in map1.items():
        c2 = map2.get(name)
        if c2 is None:
            continue
        facets: list[str] = []
        if c1.type != c2.type:
            facets.append(f"Type: {c1.type} → {c2.type}")
        if c1.nullable != c2.nullable:
            facets.append(f"Nullable: {c1.nullable} → {c2.nullable}")
        if c1.length != c2.length:
            facets.append(f"Length: {c1.length} → {c2.length}")
        if facets:
            diffs.append(ColumnDiff(name, ", ".join(facets)))

    return diffs


def compare_indexes(
    idx1: tuple[IndexInfo, ...] | list[IndexInfo],
    idx2: tuple[IndexInfo, ...] | list[IndexInfo],
) -> list[str]:
    """Describe indexes removed (only in *idx1*) and added (only in *idx2*)."""
    set1 = {i.signature for i in idx1}
    set2 = {i.signature for i in idx2}
    removed = [f"Index removed: {s}" for s in sorted(set1 - set2)]
    added = [f"Index added: {s}" for s in sorted(set2 - set1)]
    return removed + added


def diff_snapshots(
    s1: SchemaSnapshot, s2: SchemaSnapshot
) -> tuple[list[str], list[str], dict[str, TableComparison]]:
    """
    Return ``(only_in_s1, only_in_s2, table_differences)``.

    ``table_differences`` only holds tables with at least one difference.
    """
    names1 = set(s1.table_names)
    names2 = set(s2.table_names)

    table_differences: dict[str, TableComparison] = {}
    for table in sorted(names1 & names2):
        t1 = s1.table_details.get(table)
        t2 = s2.table_details.get(table)
        if t1 is None or t2 is None:
            log.debug("Table %s unresolved on one side; not compared.", table)
            continue
        comparison = TableComparison(
            column_differences=tuple(compare_columns(t1.columns, t2.columns)),
            index_differences=tuple(compare_indexes(t1.indexes, t2.indexes)),
        )
        if comparison.has_differences:
            table_differences[table] = comparison

    return sorted(names1 - names2), sorted(names2 - names1), table_differences


class SchemaComparator:
    """Loads two owners and diffs them."""

    def __init__(self, loader: SchemaLoader, analyzer: MigrationAnalyzer) -> None:
        self._loader = loader
        self._analyzer = analyzer

    def compare(self, schema1: str, schema2: str) -> SchemaComparison:
        """
        Load *schema1* and *schema2* independently and diff them.

        The embedded migration analysis covers *schema1* only.
        """
        s1 = self._loader.load_schema(schema1)
        s2 = self._loader.load_schema(schema2)
        only1, only2, table_differences = diff_snapshots(s1, s2)

        comparison = SchemaComparison(
            schema1_name=schema1,
            schema2_name=schema2,
            schema1=s1,
            schema2=s2,
            only_in_schema1=tuple(only1),
            only_in_schema2=tuple(only2),
            table_differences=table_differences,
            migration_analysis=self._analyzer.analyze_migration(s1),
        )
        if comparison.identical:
            log.info("Schemas %s and %s are structurally identical.", s1.owner, s2.owner)
        else:
            log.info(
                "Compared %s with %s: %d only in first, %d only in second, %d differing.",
                s1.owner, s2.owner, len(only1), len(only2), len(table_differences),
            )
        return comparison
