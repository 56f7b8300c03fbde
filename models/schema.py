"""
models/schema.py
----------------
Typed snapshots of catalog metadata: tables, columns, indexes and views.

Design Decision:
    Catalog rows are decoded once, at the loader boundary, into these frozen
    dataclasses. Nothing downstream of the loader sees a raw row dict.
    Sequences are tuples so a snapshot cannot be altered after construction.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ColumnInfo:
    """
    One column as declared in the catalog.

    Attributes:
        name:      Column name as stored (upper-case for unquoted identifiers).
        type:      Engine-native type name, e.g. ``"VARCHAR2"`` or ``"NUMBER"``.
        length:    Declared byte/char length, if the catalog reports one.
        precision: Numeric precision, if any.
        scale:     Numeric scale, if any.
        nullable:  True when the column accepts NULL.
    """
    name: str
    type: str
    length: int | None = None
    precision: int | None = None
    scale: int | None = None
    nullable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "length": self.length,
            "precision": self.precision,
            "scale": self.scale,
            "nullable": self.nullable,
        }


@dataclass(frozen=True)
class IndexInfo:
    """An index and whether it enforces uniqueness."""
    name: str
    unique: bool = False

    @property
    def signature(self) -> str:
        """``"NAME:UNIQUE"`` / ``"NAME:NONUNIQUE"``; the form indexes are diffed on."""
        return f"{self.name}:{'UNIQUE' if self.unique else 'NONUNIQUE'}"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "unique": self.unique}


@dataclass(frozen=True)
class TableInfo:
    """Table name plus the optimizer's row-count statistic (may be stale)."""
    name: str
    row_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "row_count": self.row_count}


@dataclass(frozen=True)
class TableDetails:
    """Columns (catalog order) and indexes of one table."""
    name: str
    columns: tuple[ColumnInfo, ...] = ()
    indexes: tuple[IndexInfo, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
            "indexes": [i.to_dict() for i in self.indexes],
        }


@dataclass(frozen=True)
class SchemaSnapshot:
    """
    Point-in-time structure of one owner's schema.

    ``table_details`` only holds tables whose columns resolved; every key is
    also present in ``tables``.
    """
    owner: str
    tables: tuple[TableInfo, ...] = ()
    table_details: dict[str, TableDetails] = field(default_factory=dict)
    views: tuple[str, ...] = ()

    @property
    def total_tables(self) -> int:
        return len(self.tables)

    @property
    def total_views(self) -> int:
        return len(self.views)

    @property
    def table_names(self) -> list[str]:
        return [t.name for t in self.tables]

    @property
    def unresolved_tables(self) -> list[str]:
        """Tables listed by the catalog whose details could not be loaded."""
        return [t.name for t in self.tables if t.name not in self.table_details]

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner": self.owner,
            "tables": [t.to_dict() for t in self.tables],
            "table_details": {k: v.to_dict() for k, v in self.table_details.items()},
            "views": list(self.views),
            "total_tables": self.total_tables,
            "total_views": self.total_views,
            "unresolved_tables": self.unresolved_tables,
        }


@dataclass(frozen=True)
class DatabaseInfo:
    """Product and driver metadata of the catalog connection."""
    database_product_name: str
    database_product_version: str
    driver_name: str
    driver_version: str
    url: str
    user_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "database_product_name": self.database_product_name,
            "database_product_version": self.database_product_version,
            "driver_name": self.driver_name,
            "driver_version": self.driver_version,
            "url": self.url,
            "user_name": self.user_name,
        }
