"""
tests/test_logger.py
--------------------
Unit tests for logger.py.
Run with: python -m pytest tests/
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from core import queries
from core.file_storage import FileStorageAnalyzer
from fakes import FakeCatalogReader, FakeSchema, FakeTable, col
from logger import ROOT_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def restore_logging() -> Iterator[None]:
    yield
    configure_logging(log_file="")


class TestConfigureLogging:
    def test_child_loggers_share_the_root(self) -> None:
        assert get_logger("core.catalog").name == f"{ROOT_LOGGER_NAME}.core.catalog"

    def test_file_receives_debug_records(self, tmp_path: Path, restore_logging: None) -> None:
        log_file = tmp_path / "logs" / "schema_intel.log"
        configure_logging(level=logging.WARNING, log_file=str(log_file))
        get_logger("tests").debug("resolved %d tables", 3)
        for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers:
            handler.flush()
        assert "resolved 3 tables" in log_file.read_text(encoding="utf-8")

    def test_reconfiguring_replaces_handlers(self, tmp_path: Path, restore_logging: None) -> None:
        configure_logging(log_file=str(tmp_path / "a.log"))
        root = configure_logging(level=logging.ERROR, log_file="")
        assert len(root.handlers) == 1
        assert root.level == logging.ERROR


class TestRecoveryWarnings:
    def test_failed_row_count_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        reader = FakeCatalogReader(
            {"DMS": FakeSchema(tables={"DOCS": FakeTable(columns=[col("BODY", "BLOB", 10)])})},
            failures={(queries.TABLE_ROW_COUNT, "DOCS")},
        )
        with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER_NAME):
            FileStorageAnalyzer(reader).analyze_file_storage("DMS")
        assert "Row count unavailable for DMS.DOCS" in caplog.text
