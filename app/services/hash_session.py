from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject, Signal, QTimer

from streamhash.config import Config
from streamhash.controller import JobController, JobSnapshot, JobStatus
from streamhash.source import FileSource, Source


_LOGGER = logging.getLogger(__name__)


class HashBus(QObject):
    state_changed = Signal(object)  # JobSnapshot
    progress = Signal(int)
    completed = Signal(dict)
    failed = Signal(str)


class HashSession(QObject):
    """Qt-side owner of one `JobController`.

    Polls the controller from a `QTimer` on the GUI thread while a job is
    computing and re-emits its snapshots as signals. Every widget gets its
    own session, so sessions never share a worker.
    """

    def __init__(
        self,
        *,
        max_size: int | None = Config.MAX_FILE_SIZE_BYTES,
        chunk_size: int = Config.DEFAULT_CHUNK_SIZE,
        poll_interval_ms: int = int(Config.POLL_INTERVAL_SECONDS * 1000),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.bus = HashBus()
        self.controller = JobController(max_size=max_size, chunk_size=chunk_size)
        self.controller.subscribe(self._on_snapshot)
        self._last_percent = -1

        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(poll_interval_ms)
        self._poll_timer.timeout.connect(self.poll)

    @property
    def is_polling(self) -> bool:
        return self._poll_timer.isActive()

    def start(self, source: Source | Path | str, description: str = "") -> None:
        """Start hashing ``source``; validation errors propagate to the caller."""

        if not isinstance(source, Source):
            source = FileSource(source)
        self._last_percent = -1
        self.controller.start(source, description=description)
        self._poll_timer.start()

    def cancel(self) -> None:
        self._poll_timer.stop()
        self.controller.cancel()

    def reset(self) -> None:
        self._poll_timer.stop()
        self.controller.reset()

    def poll(self) -> None:
        self.controller.poll()
        if self.controller.status is not JobStatus.COMPUTING:
            self._poll_timer.stop()

    def shutdown(self) -> None:
        self._poll_timer.stop()
        self.controller.close()

    def _on_snapshot(self, snap: JobSnapshot) -> None:
        self.bus.state_changed.emit(snap)
        if snap.status is JobStatus.COMPUTING and snap.percent != self._last_percent:
            self._last_percent = snap.percent
            self.bus.progress.emit(snap.percent)
        elif snap.status is JobStatus.COMPLETED and snap.result is not None:
            self.bus.completed.emit(snap.result.to_dict())
        elif snap.status is JobStatus.ERROR:
            self.bus.failed.emit(snap.error_message or "")
