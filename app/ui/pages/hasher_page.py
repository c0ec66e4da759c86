from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QScrollArea, QLabel, QFrame

from app.ui.widgets.hash_widget import HashWidget


class HasherPage(QWidget):
    """Stack of independent hashers; each owns its own worker."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.widgets: list[HashWidget] = []

        self.add_btn = QPushButton("Add Hasher")
        self.add_btn.clicked.connect(self.add_hasher)

        top = QHBoxLayout()
        top.addWidget(QLabel("Calculate SHA256 hashes for large files"))
        top.addStretch(1)
        top.addWidget(self.add_btn)

        self._container = QWidget()
        self._stack = QVBoxLayout(self._container)
        self._stack.addStretch(1)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._container)

        layout = QVBoxLayout(self)
        layout.addLayout(top)
        layout.addWidget(scroll, 1)

        self.add_hasher()

    def add_hasher(self) -> HashWidget:
        w = HashWidget()
        frame = QFrame()
        frame.setFrameShape(QFrame.Shape.StyledPanel)
        fl = QVBoxLayout(frame)
        fl.addWidget(w)
        self._stack.insertWidget(self._stack.count() - 1, frame)
        self.widgets.append(w)
        return w

    def shutdown(self) -> None:
        for w in self.widgets:
            w.shutdown()
