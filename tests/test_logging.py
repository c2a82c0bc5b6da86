"""Tests for xcconvert.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from xcconvert.logging import configure_logging, get_logger


def test_configure_logging_defaults_to_info_console() -> None:
    logger = configure_logging()

    assert logger.name == "xcconvert"
    assert [handler.level for handler in logger.handlers] == [logging.INFO]


def test_configure_logging_file_sink_records_debug(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "convert.log"
    logger = configure_logging(log_file=log_file)

    get_logger("converter").debug("planning target %s", "App")
    for handler in logger.handlers:
        handler.flush()

    assert "planning target App" in log_file.read_text(encoding="utf-8")
    configure_logging()
