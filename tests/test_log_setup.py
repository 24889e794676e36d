from loguru import logger

from funops.common import log_setup
from funops.common.log_setup import configure_logging


def test_level_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("FUNOPS_LOG_LEVEL", "warning")
    try:
        assert configure_logging() == "WARNING"
    finally:
        configure_logging("INFO")


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("FUNOPS_LOG_LEVEL", "ERROR")
    try:
        assert configure_logging("debug") == "DEBUG"
    finally:
        configure_logging("INFO")


def test_default_level_is_info(monkeypatch):
    monkeypatch.delenv("FUNOPS_LOG_LEVEL", raising=False)
    assert configure_logging() == "INFO"


def test_file_sink_receives_debug_and_is_replaced(tmp_path):
    first = tmp_path / "logs" / "first.log"
    second = tmp_path / "second.log"
    try:
        configure_logging("INFO", log_file=first)
        first_id = log_setup._FILE_SINK_ID
        logger.debug("to the first file")

        configure_logging("INFO", log_file=second)
        assert log_setup._FILE_SINK_ID != first_id
        logger.debug("to the second file")
    finally:
        configure_logging("INFO")

    assert log_setup._FILE_SINK_ID is None
    assert "to the first file" in first.read_text()
    assert "to the second file" not in first.read_text()
    assert "to the second file" in second.read_text()


def test_reconfigure_after_sinks_cleared_elsewhere(tmp_path):
    log_file = tmp_path / "cleared.log"
    try:
        configure_logging("INFO", log_file=log_file)
        logger.remove()

        assert configure_logging("DEBUG", log_file=log_file) == "DEBUG"
        logger.debug("after the reset")
    finally:
        configure_logging("INFO")

    assert "after the reset" in log_file.read_text()
