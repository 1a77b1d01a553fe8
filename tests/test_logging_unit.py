from __future__ import annotations

import logging

import pytest

from config.settings import settings
from utils.logging import configure_logging, logger, resolve_level


@pytest.fixture
def restore_logger():
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.mark.parametrize("level,expected", [("debug", logging.DEBUG), (" WARNING ", logging.WARNING), (15, 15)])
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


def test_resolve_level_defaults_to_setting(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "ERROR")
    assert resolve_level(None) == logging.ERROR


def test_resolve_level_rejects_unknown_name():
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_configure_logging_writes_thread_name_to_file(tmp_path, restore_logger):
    logfile = tmp_path / "run.log"
    assert configure_logging("info", str(logfile)) == logging.INFO
    configure_logging("info", str(logfile))  # handlers are replaced, not stacked
    assert len(logger.handlers) == 2

    logger.debug("hidden")
    logger.info("Comparing %s", "a.pdf")
    for handler in logger.handlers:
        handler.flush()

    lines = logfile.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert "| INFO | MainThread | doccompare | Comparing a.pdf" in lines[0]
