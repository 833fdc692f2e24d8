"""Tests for logging configuration."""
import logging

import pytest

from logging_setup import ENV_LEVEL, configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_default_level_is_warning(kanban_home, monkeypatch):
    monkeypatch.delenv(ENV_LEVEL, raising=False)
    configure_logging()
    assert logging.getLogger().level == logging.WARNING
    assert (kanban_home / "kanban.log").exists()


def test_env_level(monkeypatch, tmp_path):
    monkeypatch.setenv(ENV_LEVEL, "debug")
    configure_logging(log_file=tmp_path / "x.log")
    assert logging.getLogger().level == logging.DEBUG


def test_unknown_level_falls_back(tmp_path):
    configure_logging("chatty", log_file=tmp_path / "x.log")
    assert logging.getLogger().level == logging.WARNING


def test_records_go_to_file(tmp_path):
    path = tmp_path / "app.log"
    configure_logging("INFO", log_file=path)
    logging.getLogger("storage").info("wrote data")
    for handler in logging.getLogger().handlers:
        handler.flush()
    line = path.read_text().strip()
    assert "| INFO     | storage | wrote data" in line
