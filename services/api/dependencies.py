"""
Request-scoped dependencies.

Each request gets its own catalog connection, closed when the response is
sent. Tests override :func:`get_catalog_reader` with an in-memory reader.
"""
from typing import Iterator

from fastapi import Depends

from core.catalog import CatalogReader, OracleCatalogReader
from core.report import SchemaIntelligence


def get_catalog_reader() -> Iterator[CatalogReader]:
    reader = OracleCatalogReader.from_config()
    reader.connect()
    try:
        yield reader
    finally:
        reader.close()


def get_schema_intelligence(
    reader: CatalogReader = Depends(get_catalog_reader),
) -> SchemaIntelligence:
    return SchemaIntelligence(reader)
