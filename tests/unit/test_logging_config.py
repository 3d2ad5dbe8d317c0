"""Tests du niveau de log console."""

import sys

import pytest
from loguru import logger

from src import logging_config
from src.logging_config import configure_logging, set_console_level, verbosity_level


@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [(0, False, "WARNING"), (1, False, "DEBUG"), (2, False, "TRACE"), (3, False, "TRACE"), (2, True, "ERROR")],
)
def test_verbosity_level(verbose, quiet, expected) -> None:
    assert verbosity_level(verbose, quiet, default="WARNING") == expected


def test_set_console_level_without_configuration_is_noop(monkeypatch) -> None:
    monkeypatch.setattr(logging_config, "_console_handler_id", None)
    set_console_level("DEBUG")
    assert logging_config._console_handler_id is None


def test_configure_logging_writes_json_file(tmp_path, monkeypatch) -> None:
    log_file = tmp_path / "logs" / "app.log"
    try:
        configure_logging(log_level="ERROR", log_file=log_file)
        first_handler = logging_config._console_handler_id
        set_console_level("DEBUG")
        assert logging_config._console_handler_id != first_handler

        logger.info("scraping termine")
        logger.complete()
        assert '"scraping termine"' in log_file.read_text(encoding="utf-8")
    finally:
        logger.remove()
        logger.add(sys.stderr)
        monkeypatch.setattr(logging_config, "_console_handler_id", None)
