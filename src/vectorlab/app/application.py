from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

import logging
import sys
import os

from vectorlab.logging_config import install_qt_message_handler

ORG_ID = "vectorlab"
APP_ID = "vectorlab"
ORG_DOMAIN = "vectorlab.local"

VISIBLE_APP_NAME = "VectorLab"

logger = logging.getLogger(__name__)


def create_app(argv: list[str] | None = None) -> QApplication:
    """Create and configure the QApplication instance (reuses a running one)."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    os.environ.setdefault("QT_AUTO_SCREEN_SCALE_FACTOR", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv if argv is None else argv)
        install_qt_message_handler()

    app.setApplicationDisplayName(QCoreApplication.translate("App", VISIBLE_APP_NAME))
    logger.debug("QApplication ready (%s).", app.platformName())
    return app
