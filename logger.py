"""
logger.py
---------
Logging for the schema intelligence service.

Every module logs under the ``schema_intel`` hierarchy through
``get_logger(__name__)``. Handlers live on that hierarchy's root only and are
installed by :func:`configure_logging`, which runs once at import with the
values of ``CONFIG.logging`` and may be called again to switch level or file.

Recovered catalog failures (a table whose details, size, row count or
filename sample could not be read) are logged at WARNING with owner and
table, so a degraded report can be traced back to the lookup that failed.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from config import CONFIG, get_log_level

ROOT_LOGGER_NAME = "schema_intel"

_CONSOLE_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def configure_logging(level: int | None = None, log_file: str | None = None) -> logging.Logger:
    """
    (Re)install the console handler and the optional file handler.

    Args:
        level:    Console and logger level; defaults to ``LOG_LEVEL``.
        log_file: Path of a file receiving every record at DEBUG and above;
                  defaults to ``LOG_FILE``. An empty string disables it.

    Returns:
        The ``schema_intel`` root logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    level = get_log_level() if level is None else level
    path = CONFIG.logging.log_file if log_file is None else log_file
    # the file handler sees DEBUG records even when the console does not
    root.setLevel(logging.DEBUG if path else level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=_CONSOLE_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(console)

    if path:
        try:
            root.addHandler(_file_handler(Path(path)))
        except OSError as exc:
            root.warning("Could not create log file '%s': %s", path, exc)
    return root


configure_logging()


def get_logger(name: str) -> logging.Logger:
    """
    Return a child logger scoped to *name* (usually ``__name__``).

    Example::

        log = get_logger(__name__)
        log.warning("Row count unavailable for %s.%s: %s", owner, table, exc)
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
