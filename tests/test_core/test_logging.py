"""Tests for logging setup and progress helpers."""

import logging

import pytest

from simprep.core.logging import (
    LOGGER_NAME,
    get_logger,
    log_duration,
    progress_bar,
    setup_logging,
)


@pytest.fixture
def reset_logging():
    yield
    setup_logging("INFO")


def test_get_logger_is_namespaced():
    assert get_logger("data.loaders").name == "simprep.data.loaders"


def test_setup_logging_writes_log_file(tmp_path, reset_logging):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging("DEBUG", log_file=str(log_file))
    get_logger("test").info("matrix loaded")
    for handler in logging.getLogger(LOGGER_NAME).handlers:
        handler.flush()
    assert "matrix loaded" in log_file.read_text()


def test_setup_logging_replaces_handlers(tmp_path, reset_logging):
    logger = logging.getLogger(LOGGER_NAME)
    setup_logging("INFO", log_file=str(tmp_path / "first.log"))
    assert len(logger.handlers) == 2
    setup_logging("WARNING")
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_log_duration(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    with log_duration(get_logger("test"), "Tversky matrix 3x3"):
        pass
    assert "Tversky matrix 3x3 took" in caplog.text


def test_progress_bar_yields_items():
    assert list(progress_bar([1, 2, 3], total=3, disable=True)) == [1, 2, 3]
