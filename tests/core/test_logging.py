import logging

import pytest

from aniex.config import settings
from aniex.logging import QUIET_LOGGERS, LogConfig, parse_level


@pytest.fixture
def log_config(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "log_dir", tmp_path / "logs")
    return LogConfig(log_file="test.log")


@pytest.mark.parametrize("name, expected", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    (None, logging.INFO),
    ("chatty", logging.INFO),
])
def test_parse_level(name, expected):
    assert parse_level(name) == expected


def test_setup_writes_to_rotating_file(log_config):
    logger = log_config.setup_logging("debug")
    assert logger.level == logging.DEBUG

    logger.info("catalog ready")
    for handler in logger.handlers:
        handler.flush()

    assert log_config.log_path.exists()
    assert "catalog ready" in log_config.log_path.read_text(encoding="utf-8")


def test_setup_twice_does_not_stack_handlers(log_config):
    log_config.setup_logging()
    logger = log_config.setup_logging()
    assert len(logger.handlers) == 2


def test_noisy_loggers_are_quieted(log_config):
    log_config.setup_logging("DEBUG")
    for name, level in QUIET_LOGGERS.items():
        assert logging.getLogger(name).level == level


def test_unknown_level_warns(log_config, caplog):
    with caplog.at_level(logging.WARNING, logger="aniex"):
        logger = log_config.setup_logging("chatty")
    assert logger.level == logging.INFO
    assert "Unknown log level 'chatty'" in caplog.text
