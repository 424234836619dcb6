"""
Application Initialization
==========================
Builds the Qt application and the main window, then starts the event loop.

Why is this file needed?
------------------------
It is the composition root. It:
1. Configures logging (console, optional file) before anything else logs.
2. Creates the QApplication with the organisation/app names and DPI defaults.
3. Applies the global pyqtgraph look used by the plots in lesson panels.
4. Opens the main window.

Run with: python -m vectorlab  (or the `vectorlab` console script)
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import pyqtgraph as pg

from vectorlab.app.application import create_app
from vectorlab.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vectorlab", description="Interactive linear algebra and calculus lab.")
    parser.add_argument("--lesson", help="Key of the lesson to open first (e.g. 'dot_product').")
    parser.add_argument("--log-file", help="Also write the log to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    args, _qt_args = parser.parse_known_args(argv)
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    # 1. Logging (level from VECTORLAB_LOG_LEVEL unless --debug)
    setup_logging(level=logging.DEBUG if args.debug else None, log_file=args.log_file)

    # 2. Qt application
    app = create_app()

    pg.setConfigOption("background", "w")
    pg.setConfigOption("foreground", "k")
    pg.setConfigOptions(antialias=True)

    # 3. Main window (imported late so the lesson registry fills after Qt is up)
    from vectorlab.app.ui.main_window import MainWindow

    win = MainWindow()
    if args.lesson:
        try:
            win.select_lesson(args.lesson)
        except KeyError:
            logger.warning("Unknown lesson '%s', opening the default one.", args.lesson)
    win.show()
    logger.info("VectorLab started.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
