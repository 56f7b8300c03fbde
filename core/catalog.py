"""
core/catalog.py
---------------
Catalog access: the reader protocol, the Oracle implementation, and the
error types every analyzer shares.

Design Decisions:
    * Analyzers depend on the small :class:`CatalogReader` protocol, not on a
      driver. Tests hand them an in-memory reader.
    * ``OracleCatalogReader`` is a context manager so callers can use it with
      ``with`` statements and be guaranteed the connection is closed on exit.
    * Connect is retried with linear back-off
      (``max_retries`` / ``retry_delay``).
    * Every value is bound by name; driver errors are re-raised as
      :class:`CatalogError` so callers never import the driver.
    * Recoverable lookups return a :class:`Fetch` (value or error). The
      caller decides the fallback once, where the policy is visible.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Mapping, NamedTuple, Protocol

import oracledb

from config import CONFIG
from logger import get_logger
from models.schema import DatabaseInfo

log = get_logger(__name__)

Row = dict[str, Any]


class CatalogError(Exception):
    """Raised when a catalog query fails."""


class CatalogConnectionError(CatalogError):
    """Raised when the catalog connection cannot be opened or described."""


class CatalogRowError(CatalogError):
    """Raised when a catalog row does not have the expected shape."""


class CatalogReader(Protocol):
    """Anything that can run a catalog query and describe its connection."""

    def query(self, sql: str, params: Mapping[str, Any] | None = None) -> list[Row]:
        ...

    def database_info(self) -> DatabaseInfo:
        ...


# ---------------------------------------------------------------------------
# Recoverable lookups
# ---------------------------------------------------------------------------

class Fetch(NamedTuple):
    """Result of a lookup whose failure the caller may choose to tolerate."""
    value: Any = None
    error: CatalogError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: Any) -> Any:
        return self.value if self.error is None else default


def attempt(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Fetch:
    """Run *fn* and capture a :class:`CatalogError` instead of raising it."""
    try:
        return Fetch(fn(*args, **kwargs))
    except CatalogError as exc:
        return Fetch(error=exc)


# ---------------------------------------------------------------------------
# Row decoding
# ---------------------------------------------------------------------------

def row_str(row: Row, key: str) -> str:
    """Return a required string column of *row*."""
    value = row.get(key)
    if not isinstance(value, str):
        raise CatalogRowError(f"Expected text in column {key}, got {value!r}")
    return value


def row_int(row: Row, key: str) -> int | None:
    """Return an optional numeric column of *row* as ``int``."""
    value = row.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise CatalogRowError(f"Expected a number in column {key}, got {value!r}") from exc


def normalize_identifier(name: str) -> str:
    """Unquoted catalog identifiers are stored upper-case."""
    return name.upper()


# ---------------------------------------------------------------------------
# Oracle implementation
# ---------------------------------------------------------------------------

class OracleCatalogReader:
    """
    Read-only Oracle connection used for catalog introspection.

    Example::

        with OracleCatalogReader.from_config() as reader:
            rows = reader.query(queries.LIST_TABLES, {"owner": "HR"})
    """

    def __init__(
        self,
        dsn: str,
        user: str,
        password: str,
        connect_timeout: int = 10,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        self._dsn = dsn
        self._user = user
        self._password = password
        self._connect_timeout = connect_timeout
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._conn: oracledb.Connection | None = None

    @classmethod
    def from_config(cls) -> "OracleCatalogReader":
        """Convenience factory using values from the application config."""
        return cls(
            dsn=CONFIG.catalog.dsn,
            user=CONFIG.catalog.user,
            password=CONFIG.catalog.password,
            connect_timeout=CONFIG.catalog.connect_timeout,
            max_retries=CONFIG.catalog.max_retries,
            retry_delay=CONFIG.catalog.retry_delay,
        )

    def __enter__(self) -> "OracleCatalogReader":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """
        Open the connection, retrying transient failures.

        Raises:
            CatalogConnectionError: If every attempt fails.
        """
        for attempt_no in range(1, self._max_retries + 1):
            try:
                log.info(
                    "Connecting to catalog at %s (attempt %d/%d)",
                    self._dsn, attempt_no, self._max_retries,
                )
                self._conn = oracledb.connect(
                    user=self._user,
                    password=self._password,
                    dsn=self._dsn,
                    tcp_connect_timeout=self._connect_timeout,
                )
                log.info("Connected to catalog as %s.", self._user)
                return
            except oracledb.Error as exc:
                log.warning("Connection attempt %d failed: %s", attempt_no, exc)
                if attempt_no < self._max_retries:
                    time.sleep(self._retry_delay * attempt_no)
        raise CatalogConnectionError(
            f"Could not connect to catalog at {self._dsn} "
            f"after {self._max_retries} attempts."
        )

    def close(self) -> None:
        if self._conn is None:
            return
        try:
            self._conn.close()
            log.info("Catalog connection closed.")
        except oracledb.Error as exc:
            log.warning("Error while closing catalog connection: %s", exc)
        self._conn = None

    @property
    def is_connected(self) -> bool:
        return self._conn is not None and self._conn.is_healthy()

    def _ensure_connected(self) -> oracledb.Connection:
        if not self.is_connected:
            raise CatalogConnectionError(
                "Catalog connection is not open or no longer usable. Call connect() first."
            )
        return self._conn

    # ------------------------------------------------------------------
    # CatalogReader
    # ------------------------------------------------------------------

    def query(self, sql: str, params: Mapping[str, Any] | None = None) -> list[Row]:
        """
        Execute *sql* and return every row as a ``{COLUMN_LABEL: value}`` dict.

        Raises:
            CatalogConnectionError: If not connected.
            CatalogError: On any driver error or undecodable row data.
        """
        conn = self._ensure_connected()
        try:
            with conn.cursor() as cursor:
                cursor.execute(sql, dict(params or {}))
                labels = [d[0].upper() for d in cursor.description or ()]
                return [dict(zip(labels, values)) for values in cursor.fetchall()]
        except oracledb.Error as exc:
            log.error("Catalog query error: %s | SQL: %.500s", exc, sql)
            raise CatalogError(str(exc)) from exc
        except UnicodeDecodeError as exc:
            # thin mode decodes VARCHAR2 data client-side; legacy-charset rows fail here
            log.error("Undecodable row data: %s | SQL: %.500s", exc, sql)
            raise CatalogError(f"Undecodable row data: {exc}") from exc

    def database_info(self) -> DatabaseInfo:
        """
        Describe the product and driver behind this connection.

        Raises:
            CatalogConnectionError: If the connection is closed or unusable.
        """
        conn = self._ensure_connected()
        try:
            return DatabaseInfo(
                database_product_name="Oracle",
                database_product_version=conn.version,
                driver_name="python-oracledb",
                driver_version=oracledb.__version__,
                url=conn.dsn,
                user_name=conn.username,
            )
        except oracledb.Error as exc:
            raise CatalogConnectionError(
                f"Could not read database metadata: {exc}"
            ) from exc
