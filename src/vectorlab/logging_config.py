"""
Logging Configuration
Sets up the 'vectorlab' logger and routes Qt's own diagnostics into it.
"""
import logging
import sys
from typing import Optional

from vectorlab.config import log_level_from_env

LOGGER_NAME = "vectorlab"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'vectorlab' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG). When None, the level is read
            from the VECTORLAB_LOG_LEVEL environment variable (default INFO).
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = log_level_from_env()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Re-running setup (e.g. in tests) must not stack handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized (level=%s).", logging.getLevelName(level))
    return logger


def install_qt_message_handler() -> None:
    """Forward qDebug/qWarning/qCritical output to the 'vectorlab.qt' logger."""
    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    qt_logger = logging.getLogger(f"{LOGGER_NAME}.qt")
    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _handler(msg_type, context, message) -> None:
        qt_logger.log(levels.get(msg_type, logging.INFO), message)

    qInstallMessageHandler(_handler)
