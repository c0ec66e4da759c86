from __future__ import annotations

from PySide6.QtCore import QUrl
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QSpinBox,
    QPushButton,
)
from PySide6.QtGui import QDesktopServices

from app.core.paths import logs_dir
from app.core.settings import load_settings, save_settings

_MIB = 1024 * 1024


class SettingsPage(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        self._settings = load_settings()

        # Chunk size (MiB)
        self.chunk_spin = QSpinBox()
        self.chunk_spin.setRange(1, 1024)
        self.chunk_spin.setSuffix(" MiB")
        self.chunk_spin.setValue(max(1, self._settings.chunk_size // _MIB))
        self.chunk_spin.valueChanged.connect(self.on_chunk_changed)

        # Max file size (GiB)
        self.max_spin = QSpinBox()
        self.max_spin.setRange(0, 1024)
        self.max_spin.setSuffix(" GiB")
        self.max_spin.setValue(self._settings.max_file_size // (1024 * _MIB))
        self.max_spin.setToolTip("0 = unlimited")
        self.max_spin.valueChanged.connect(self.on_max_changed)

        self.open_logs = QPushButton("Open Logs Folder")
        self.open_logs.clicked.connect(lambda: QDesktopServices.openUrl(QUrl.fromLocalFile(str(logs_dir()))))

        # Layout
        layout = QVBoxLayout(self)

        row1 = QHBoxLayout()
        row1.addWidget(QLabel("Chunk size:"))
        row1.addWidget(self.chunk_spin)
        row1.addStretch(1)
        layout.addLayout(row1)

        row2 = QHBoxLayout()
        row2.addWidget(QLabel("Max file size:"))
        row2.addWidget(self.max_spin)
        row2.addStretch(1)
        layout.addLayout(row2)

        row3 = QHBoxLayout()
        row3.addWidget(self.open_logs)
        row3.addStretch(1)
        layout.addLayout(row3)

        layout.addWidget(QLabel("Changes apply to hashers added after saving."))
        layout.addStretch(1)

    # Handlers ---------------------------------------------------------------
    def on_chunk_changed(self, n: int) -> None:
        self._settings.chunk_size = int(n) * _MIB
        save_settings(self._settings)

    def on_max_changed(self, n: int) -> None:
        self._settings.max_file_size = int(n) * 1024 * _MIB
        save_settings(self._settings)
