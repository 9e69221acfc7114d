"""Application entry point."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from formstudio.config import Settings
from formstudio.logging_setup import setup_logging
from formstudio.ui.main_window import MainWindow


def main() -> int:
    settings = Settings.from_env()
    logger = setup_logging(settings)
    logger.info("Starting FormStudio, submissions go to %s", settings.endpoint)

    app = QApplication(sys.argv)
    window = MainWindow(settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
