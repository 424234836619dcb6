import logging

import pytest

from vectorlab.config import LOG_LEVEL_ENV, log_level_from_env
from vectorlab.logging_config import LOGGER_NAME, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, list(logger.handlers))
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]


def test_setup_writes_to_the_log_file(package_logger, tmp_path):
    path = tmp_path / "vectorlab.log"
    logger = setup_logging(level=logging.DEBUG, log_file=str(path))
    assert logger is package_logger
    logging.getLogger(f"{LOGGER_NAME}.core.camera").debug("pitch clamped")
    for handler in logger.handlers:
        handler.flush()
    text = path.read_text(encoding="utf-8")
    assert "Logging initialized (level=DEBUG)" in text
    assert "vectorlab.core.camera - DEBUG - pitch clamped" in text


def test_repeated_setup_does_not_stack_handlers(package_logger):
    setup_logging(level=logging.INFO)
    setup_logging(level=logging.WARNING)
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.WARNING


def test_level_comes_from_the_environment(package_logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    setup_logging()
    assert package_logger.level == logging.DEBUG


@pytest.mark.parametrize(
    "raw, expected",
    [("", logging.INFO), ("WARNING", logging.WARNING), ("10", logging.DEBUG), ("chatty", logging.INFO)],
)
def test_log_level_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv(LOG_LEVEL_ENV, raw)
    assert log_level_from_env() == expected


def test_log_level_from_env_when_unset(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    assert log_level_from_env(logging.ERROR) == logging.ERROR
