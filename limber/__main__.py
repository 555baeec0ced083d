"""Allow running Limber as a module: python -m limber."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import LimberApp


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("LIMBER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("Limber")
    app.setOrganizationName("Limber")

    window = LimberApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
