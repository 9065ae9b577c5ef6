from __future__ import annotations
import sys

from PySide6.QtWidgets import QApplication

from core.config import get_settings
from core.logger import configure_logging, get_logger
from core.services.client_service import ClientService
from ui.main_window import MainWindow


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info("Using client collection %s", settings.api_url)

    app = QApplication(sys.argv)
    win = MainWindow(ClientService(settings=settings))
    win.show()
    win.load()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
