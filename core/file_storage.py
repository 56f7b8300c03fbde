"""
core/file_storage.py
--------------------
Detects tables used as ad-hoc file storage and scores their migration risk.

For each table holding large-object columns the analyzer estimates a size,
guesses the kind of files from column names, samples a few filenames and
combines those signals into a LOW / MEDIUM / HIGH risk level.

Design Decisions:
    * Listing the blob tables is fatal on failure; everything per table
      (size, row count, filename sample) degrades to 0 / empty and is logged.
    * The filename sample is the only query that reads table data. It runs
      through :func:`attempt` like the other per-table lookups, so a missing
      privilege never aborts the analysis.
    * Scoring and tagging are pure module-level functions.
"""
from __future__ import annotations

from typing import Any, Iterable, NamedTuple, Sequence

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
from models.analysis import FileStorageAnalysis, RiskLevel, TableWithFiles

log = get_logger(__name__)

BYTES_PER_MB = 1024 * 1024
SAMPLE_LIMIT = 5
BINARY_TAG = "BINARY"

# Content tag → keywords looked for in (upper-cased) column names.
FILE_TYPE_PATTERNS: dict[str, tuple[str, ...]] = {
    "PDF": ("PDF", "DOCUMENTO", "ARCHIVO", "FILE"),
    "DOC": ("DOC", "WORD", "DOCX", "ODT"),
    "IMG": ("IMAGEN", "FOTO", "IMAGE", "JPG", "JPEG", "PNG", "GIF"),
    "EXCEL": ("EXCEL", "XLS", "XLSX", "SPREADSHEET"),
    "VIDEO": ("VIDEO", "MP4", "AVI", "MOV"),
    "AUDIO": ("AUDIO", "MP3", "WAV"),
    "ZIP": ("ZIP", "RAR", "COMPRESS", "ARCHIVO_COMPRIMIDO"),
}

_OFFICE_TAGS = frozenset({"PDF", "DOC", "EXCEL"})
_MULTIMEDIA_TAGS = frozenset({"IMG", "VIDEO", "AUDIO"})

NO_FILE_STORAGE = "No tables with binary file storage were detected"


class BlobTable(NamedTuple):
    """One row of the grouped blob-column listing."""
    table_name: str
    blob_columns: tuple[str, ...]
    blob_count: int


def decode_blob_table(row: Row) -> BlobTable:
    columns = row_str(row, "BLOB_COLUMNS")
    return BlobTable(
        table_name=row_str(row, "TABLE_NAME"),
        blob_columns=tuple(columns.split(", ")),
        blob_count=row_int(row, "BLOB_COUNT") or 0,
    )


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def detect_file_types(blob_columns: Iterable[str]) -> tuple[str, ...]:
    """
    Guess content tags from ``"NAME:TYPE"`` descriptors.

    Tags appear in first-detection order; a column may add several tags.
    Returns ``("BINARY",)`` when no keyword matches.

    Example::

        detect_file_types(["FOTO_PERFIL:BLOB", "CONTRATO_PDF:BLOB"])
        # ("PDF", "IMG")
    """
    found: list[str] = []
    for descriptor in blob_columns:
        name = descriptor.split(":")[0].upper()
        for tag, keywords in FILE_TYPE_PATTERNS.items():
            if tag not in found and any(k in name for k in keywords):
                found.append(tag)
    return tuple(found) if found else (BINARY_TAG,)


def calculate_risk_score(blob_count: int, size_mb: int, file_types: Sequence[str]) -> int:
    """Additive score: column count + size tier + content-type bonuses."""
    if blob_count >= 3:
        score = 3
    elif blob_count == 2:
        score = 2
    else:
        score = 1

    if size_mb > 1024:
        score += 3
    elif size_mb > 100:
        score += 2
    else:
        score += 1

    tags = set(file_types)
    if tags & _OFFICE_TAGS:
        score += 2
    if tags & _MULTIMEDIA_TAGS:
        score += 3
    return score


def risk_level_for_score(score: int) -> RiskLevel:
    if score >= 6:
        return RiskLevel.HIGH
    if score >= 4:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def calculate_risk_level(blob_count: int, size_mb: int, file_types: Sequence[str]) -> RiskLevel:
    return risk_level_for_score(calculate_risk_score(blob_count, size_mb, file_types))


def file_type_distribution(tables: Iterable[TableWithFiles]) -> dict[str, int]:
    """Number of tables exhibiting each tag."""
    distribution: dict[str, int] = {}
    for table in tables:
        for tag in set(table.detected_file_types):
            distribution[tag] = distribution.get(tag, 0) + 1
    return distribution


def build_recommendations(tables: Sequence[TableWithFiles], total_size_mb: int) -> list[str]:
    if not tables:
        return [NO_FILE_STORAGE]

    recommendations: list[str] = []
    if total_size_mb > 1024:
        recommendations.append(
            f"HIGH VOLUME: detected {len(tables)} tables holding "
            f"{total_size_mb / 1024.0:.2f} GB of files"
        )
        recommendations.append(
            "Consider moving the files to a file system or a cloud storage service"
        )

    high_risk = [t for t in tables if t.risk_level is RiskLevel.HIGH]
    if high_risk:
        recommendations.append(
            f"ALERT: {len(high_risk)} tables at high risk of holding inappropriate files"
        )
        for t in high_risk:
            recommendations.append(f"Review table {t.table_name}: {', '.join(t.blob_columns)}")

    all_types = {tag for t in tables for tag in t.detected_file_types}
    if "PDF" in all_types or "DOC" in all_types:
        recommendations.append(
            "Office documents (PDF/DOC) detected. Consider a document repository"
        )
    if "IMG" in all_types:
        recommendations.append("Images detected. Consider a CDN or an image service")
    return recommendations


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class FileStorageAnalyzer:
    """
    Finds blob-heavy tables for one owner.

    Example::

        analysis = FileStorageAnalyzer(reader).analyze_file_storage("docs")
        for t in analysis.tables_with_files:
            print(t.table_name, t.risk_level.value)
    """

    def __init__(self, reader: CatalogReader) -> None:
        self._reader = reader

    # ------------------------------------------------------------------
    # Catalog lookups (raise CatalogError)
    # ------------------------------------------------------------------

    def list_blob_tables(self, owner: str) -> list[BlobTable]:
        """Blob-holding tables, most blob columns first."""
        rows = self._reader.query(queries.LIST_BLOB_TABLES, {"owner": owner})
        tables = [decode_blob_table(r) for r in rows]
        return sorted(tables, key=lambda t: -t.blob_count)

    def estimate_size_mb(self, owner: str, table_name: str) -> int:
        rows = self._reader.query(
            queries.ESTIMATE_BLOB_BYTES, {"owner": owner, "table_name": table_name}
        )
        total_bytes = row_int(rows[0], "TOTAL_BYTES") if rows else None
        return (total_bytes or 0) // BYTES_PER_MB

    def fetch_row_count(self, owner: str, table_name: str) -> int:
        rows = self._reader.query(
            queries.TABLE_ROW_COUNT, {"owner": owner, "table_name": table_name}
        )
        return (row_int(rows[0], "NUM_ROWS") if rows else None) or 0

    def sample_filenames(self, owner: str, table_name: str) -> tuple[str, ...]:
        candidates = self._reader.query(
            queries.FILENAME_COLUMNS, {"owner": owner, "table_name": table_name}
        )
        if not candidates:
            return ()
        column = row_str(candidates[0], "COLUMN_NAME")
        rows = self._reader.query(
            queries.sample_values_sql(owner, table_name, column, SAMPLE_LIMIT)
        )
        values = [r.get("SAMPLE_VALUE") for r in rows]
        return tuple(str(v) for v in values if v is not None)[:SAMPLE_LIMIT]

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def analyze_file_storage(self, owner: str) -> FileStorageAnalysis:
        """
        Score every blob-holding table of *owner*.

        Raises:
            CatalogError: Only if the blob-table listing itself fails.
        """
        owner = normalize_identifier(owner)
        tables: list[TableWithFiles] = []

        for blob in self.list_blob_tables(owner):
            name = blob.table_name
            size_mb = _recover(
                attempt(self.estimate_size_mb, owner, name), 0, "size estimate", owner, name
            )
            file_types = detect_file_types(blob.blob_columns)
            row_count = _recover(
                attempt(self.fetch_row_count, owner, name), 0, "row count", owner, name
            )
            samples = _recover(
                attempt(self.sample_filenames, owner, name), (), "filename sample", owner, name
            )
            tables.append(TableWithFiles(
                table_name=name,
                blob_column_count=blob.blob_count,
                blob_columns=blob.blob_columns,
                estimated_size_mb=size_mb,
                detected_file_types=file_types,
                row_count=row_count,
                sample_filenames=samples,
                risk_level=calculate_risk_level(blob.blob_count, size_mb, file_types),
            ))

        total_size_mb = sum(t.estimated_size_mb for t in tables)
        log.info(
            "File storage analysis for %s: %d table(s), %d MB estimated.",
            owner, len(tables), total_size_mb,
        )
        return FileStorageAnalysis(
            tables_with_files=tuple(tables),
            estimated_total_size_mb=total_size_mb,
            recommendations=tuple(build_recommendations(tables, total_size_mb)),
            file_type_distribution=file_type_distribution(tables),
        )


def _recover(fetched: Fetch, default: Any, what: str, owner: str, table_name: str) -> Any:
    if not fetched.ok:
        log.warning("%s unavailable for %s.%s: %s", what.capitalize(), owner, table_name, fetched.error)
    return fetched.value_or(default)
