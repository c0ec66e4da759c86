from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from app.core.paths import logs_dir
from app.ui.main_window import MainWindow


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
        handlers=[logging.FileHandler(logs_dir() / "streamhash.log", encoding="utf-8")],
    )


def main() -> int:
    _configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("StreamHash")
    app.setOrganizationName("StreamHash")

    window = MainWindow()
    window.resize(800, 600)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
