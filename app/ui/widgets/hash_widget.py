from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QPlainTextEdit,
    QFileDialog,
    QProgressBar,
    QLineEdit,
    QGroupBox,
)

from app.services.app_ctx import new_session
from streamhash.config import Config, MESSAGES
from streamhash.controller import JobSnapshot, JobStatus
from streamhash.errors import StreamHashError
from streamhash.utils import format_bytes


class HashWidget(QWidget):
    """Self-contained hasher: one file, one session, one worker at a time."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._path: Path | None = None
        self.session = new_session(self)

        # File selection
        self.choose_btn = QPushButton("Choose File…")
        self.choose_btn.clicked.connect(self.choose_file)
        self.file_label = QLabel(MESSAGES["errors"]["no_file_selected"])

        # Description
        self.description_edit = QPlainTextEdit()
        self.description_edit.setPlaceholderText("Add a description for this file...")
        self.description_edit.setMaximumHeight(80)
        self.description_edit.textChanged.connect(self._on_description_changed)
        self.remaining_label = QLabel("")

        # Actions
        self.compute_btn = QPushButton("Compute SHA256")
        self.compute_btn.clicked.connect(self.compute)
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self.session.cancel)
        self.progress = QProgressBar()
        self.progress.setRange(0, 100)

        # Result
        self.result_box = QGroupBox(MESSAGES["success"]["hash_computed"])
        self.digest_edit = QLineEdit()
        self.digest_edit.setReadOnly(True)
        self.copy_btn = QPushButton("Copy Hash")
        self.copy_btn.clicked.connect(self.copy_digest)
        self.details_label = QLabel("")
        self.another_btn = QPushButton("Compute Another Hash")
        self.another_btn.clicked.connect(self.start_over)
        rl = QVBoxLayout(self.result_box)
        row = QHBoxLayout()
        row.addWidget(self.digest_edit, 1)
        row.addWidget(self.copy_btn)
        rl.addLayout(row)
        rl.addWidget(self.details_label)
        rl.addWidget(self.another_btn)

        # Error
        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #b91c1c;")
        self.error_label.setWordWrap(True)
        self.retry_btn = QPushButton("Try Again")
        self.retry_btn.clicked.connect(self.retry)

        # Layout
        top = QHBoxLayout()
        top.addWidget(self.choose_btn)
        top.addWidget(self.file_label, 1)

        actions = QHBoxLayout()
        actions.addWidget(self.compute_btn)
        actions.addWidget(self.cancel_btn)
        actions.addStretch(1)

        layout = QVBoxLayout(self)
        layout.addLayout(top)
        layout.addWidget(self.description_edit)
        layout.addWidget(self.remaining_label)
        layout.addLayout(actions)
        layout.addWidget(self.progress)
        layout.addWidget(self.result_box)
        layout.addWidget(self.error_label)
        layout.addWidget(self.retry_btn)
        layout.addStretch(1)

        self.session.bus.state_changed.connect(self.render)
        self._on_description_changed()
        self.render(self.session.controller.snapshot())

    # Intents ----------------------------------------------------------------
    def choose_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Choose file to hash", "", "All files (*.*)")
        if path:
            self.set_file(Path(path))

    def set_file(self, path: Path) -> None:
        status = self.session.controller.status
        if status is JobStatus.COMPUTING:
            self.session.cancel()
        elif status is not JobStatus.IDLE:
            self.session.reset()
        self._path = path
        try:
            size = format_bytes(path.stat().st_size)
        except OSError:
            size = "?"
        self.file_label.setText(f"{path.name} ({size})")
        self._show_error("")
        self.render(self.session.controller.snapshot())

    def compute(self) -> None:
        if self._path is None:
            self._show_error(MESSAGES["errors"]["no_file_selected"])
            return
        self._show_error("")
        try:
            self.session.start(self._path, description=self.description_edit.toPlainText())
        except StreamHashError as e:
            # Validation and unreadable-file failures leave the session idle
            self._show_error(str(e))

    def start_over(self) -> None:
        self._path = None
        self.file_label.setText(MESSAGES["errors"]["no_file_selected"])
        self.description_edit.clear()
        self.session.reset()

    def retry(self) -> None:
        self.session.reset()
        self.compute()

    def copy_digest(self) -> None:
        QGuiApplication.clipboard().setText(self.digest_edit.text())
        self.copy_btn.setText(MESSAGES["success"]["hash_copied"])
        QTimer.singleShot(2000, lambda: self.copy_btn.setText("Copy Hash"))

    def shutdown(self) -> None:
        self.session.shutdown()

    # Rendering --------------------------------------------------------------
    def render(self, snap: JobSnapshot) -> None:
        status = snap.status
        has_file = self._path is not None
        self.choose_btn.setEnabled(status is not JobStatus.COMPUTING)
        self.description_edit.setVisible(has_file and status is not JobStatus.COMPLETED)
        self.remaining_label.setVisible(has_file and status is not JobStatus.COMPLETED)
        self.compute_btn.setVisible(status is JobStatus.IDLE)
        self.compute_btn.setEnabled(has_file)
        self.cancel_btn.setVisible(status is JobStatus.COMPUTING)
        self.progress.setVisible(status is JobStatus.COMPUTING)
        self.progress.setValue(snap.percent)
        self.result_box.setVisible(status is JobStatus.COMPLETED)
        self.retry_btn.setVisible(status is JobStatus.ERROR)

        if status is JobStatus.COMPLETED and snap.result is not None:
            r = snap.result
            self.digest_edit.setText(r.digest_hex)
            details = f"File: {r.file_name}    Size: {format_bytes(r.file_size)}"
            if r.description:
                details += f"\nDescription: {r.description}"
            details += f"\nComputed at: {r.computed_at.astimezone():%Y-%m-%d %H:%M:%S}"
            self.details_label.setText(details)
        if status is JobStatus.ERROR:
            self._show_error(snap.error_message or MESSAGES["errors"]["computation_failed"])
        elif status is JobStatus.COMPUTING:
            self._show_error("")

    def _show_error(self, msg: str) -> None:
        self.error_label.setText(msg)
        self.error_label.setVisible(bool(msg))

    def _on_description_changed(self) -> None:
        text = self.description_edit.toPlainText()
        limit = Config.MAX_DESCRIPTION_LENGTH
        if len(text) > limit:
            self.description_edit.blockSignals(True)
            self.description_edit.setPlainText(text[:limit])
            self.description_edit.blockSignals(False)
            text = text[:limit]
        self.remaining_label.setText(f"{limit - len(text)} characters remaining")
