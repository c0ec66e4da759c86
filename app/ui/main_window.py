from __future__ import annotations

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QTabWidget

from app.ui.pages.hasher_page import HasherPage
from app.ui.pages.settings_page import SettingsPage


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("StreamHash")

        self.hasher_page = HasherPage(self)
        tabs = QTabWidget()
        tabs.addTab(self.hasher_page, "Hash Files")
        tabs.addTab(SettingsPage(self), "Settings")

        self.setCentralWidget(tabs)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.hasher_page.shutdown()
        super().closeEvent(event)
