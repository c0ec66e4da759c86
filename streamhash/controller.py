"""Job state machine that drives a `WorkerChannel` for one hashing session.

`JobController` is the only object a presentation layer talks to. It issues
the single `ComputeDigest` for a job, applies the channel's responses to its
visible state, and cancels by replacing the channel outright:

    Idle --start--> Computing --Result--> Completed --reset--> Idle
                      |  |------Error---> Error     --reset--> Idle
                      |--cancel--> Idle

State is only ever mutated on the thread that calls `start`, `poll`,
`cancel` and `reset`; the worker thread communicates solely through the
channel's queue.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from streamhash.channel import WorkerChannel
from streamhash.config import Config, MESSAGES
from streamhash.errors import InvalidTransition, ProtocolViolation
from streamhash.messages import ComputeDigest, Error, Progress, Response, Result
from streamhash.source import Source
from streamhash.validation import validate_description, validate_size


_LOGGER = logging.getLogger(__name__)


class JobStatus(str, Enum):
    IDLE = "IDLE"
    COMPUTING = "COMPUTING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class HashResult:
    digest_hex: str
    file_name: str
    file_size: int
    description: str
    computed_at: datetime

    def to_dict(self) -> dict:
        return {
            "digest": self.digest_hex,
            "algorithm": Config.ALGORITHM,
            "file_name": self.file_name,
            "file_size": self.file_size,
            "description": self.description,
            "computed_at": self.computed_at.isoformat(),
        }


@dataclass(frozen=True)
class JobSnapshot:
    """Immutable view of the controller handed to the presentation layer."""

    status: JobStatus
    percent: int = 0
    digest_hex: Optional[str] = None
    error_message: Optional[str] = None
    result: Optional[HashResult] = None
    source_name: Optional[str] = None
    description: str = ""


@dataclass
class _JobState:
    status: JobStatus = JobStatus.IDLE
    source: Optional[Source] = None
    chunk_size: int = 0
    description: str = ""
    percent: int = 0
    digest_hex: Optional[str] = None
    error: Optional[str] = None
    result: Optional[HashResult] = None
    started_at: float = field(default=0.0, repr=False)


Listener = Callable[[JobSnapshot], None]


class JobController:
    """Per-session state machine over a replaceable `WorkerChannel`.

    Parameters
    ----------
    max_size:
        Largest accepted source in bytes; ``None`` disables the check.
    chunk_size:
        Bytes per chunk for every job started by this controller.
    max_description_length:
        Longest accepted description; ``None`` disables the check.
    channel_factory:
        Builds fresh, unstarted channels. A new one is created at
        construction and after every cancellation.
    """

    def __init__(
        self,
        *,
        max_size: int | None = Config.MAX_FILE_SIZE_BYTES,
        chunk_size: int = Config.DEFAULT_CHUNK_SIZE,
        max_description_length: int | None = Config.MAX_DESCRIPTION_LENGTH,
        channel_factory: Callable[[], WorkerChannel] = WorkerChannel,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.max_size = max_size
        self.chunk_size = int(chunk_size)
        self.max_description_length = max_description_length
        self._channel_factory = channel_factory
        self._channel = channel_factory()
        self._state = _JobState()
        self._listeners: list[Listener] = []

    # Inspection ---------------------------------------------------------------
    @property
    def status(self) -> JobStatus:
        return self._state.status

    @property
    def percent(self) -> int:
        return self._state.percent

    @property
    def channel(self) -> WorkerChannel:
        return self._channel

    def snapshot(self) -> JobSnapshot:
        st = self._state
        return JobSnapshot(
            status=st.status,
            percent=st.percent,
            digest_hex=st.digest_hex,
            error_message=st.error,
            result=st.result,
            source_name=st.source.name if st.source is not None else None,
            description=st.description,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # Intents ------------------------------------------------------------------
    def start(self, source: Source, description: str = "") -> None:
        st = self._state
        if st.status is JobStatus.COMPUTING:
            raise ProtocolViolation("A job is already computing on this controller; cancel it first")
        if st.status is not JobStatus.IDLE:
            raise InvalidTransition(f"Cannot start from {st.status.value}; reset() first")

        validate_size(source.total_size, self.max_size)
        validate_description(description, self.max_description_length)

        self._channel.send(ComputeDigest(source, self.chunk_size))
        st.status = JobStatus.COMPUTING
        st.source = source
        st.chunk_size = self.chunk_size
        st.description = description
        st.percent = 0
        st.digest_hex = None
        st.error = None
        st.result = None
        st.started_at = time.monotonic()
        _LOGGER.info("Started job on %s via channel %s", source.name, self._channel.channel_id[:8])
        self._notify()

    def poll(self, timeout: float | None = None) -> int:
        """Apply pending channel events; returns how many were applied."""

        if self._state.status is not JobStatus.COMPUTING:
            return 0
        applied = 0
        for msg in self._channel.receive(timeout=timeout):
            if self._state.status is not JobStatus.COMPUTING:
                _LOGGER.warning("Dropping %s received after the job terminated", msg.kind)
                break
            self._apply(msg)
            applied += 1
        return applied

    def wait(self, timeout: float | None = None, interval: float = Config.POLL_INTERVAL_SECONDS) -> JobSnapshot:
        """Block, polling, until the job leaves `COMPUTING` or ``timeout`` elapses."""

        deadline = None if timeout is None else time.monotonic() + timeout
        while self._state.status is JobStatus.COMPUTING:
            if deadline is not None and time.monotonic() >= deadline:
                break
            self.poll(timeout=interval)
        return self.snapshot()

    def cancel(self) -> bool:
        """Abandon the running job and swap in a fresh channel.

        Returns ``False`` when there was nothing to cancel.
        """

        st = self._state
        if st.status is not JobStatus.COMPUTING:
            return False
        old = self._channel
        self._channel = self._channel_factory()
        old.discard()
        st.status = JobStatus.IDLE
        st.percent = 0
        st.error = None
        _LOGGER.info("Cancelled job on %s (channel %s replaced)", st.source.name if st.source else "?", old.channel_id[:8])
        self._notify()
        return True

    def reset(self) -> None:
        st = self._state
        if st.status is JobStatus.COMPUTING:
            raise InvalidTransition("Cannot reset while computing; cancel() first")
        if st.status is not JobStatus.IDLE:
            # The finished channel has carried its one job
            self._channel = self._channel_factory()
        self._state = _JobState()
        self._notify()

    def close(self) -> None:
        """Discard the current channel; the controller is unusable afterwards."""

        self._channel.discard()
        self._listeners.clear()

    # Internals ----------------------------------------------------------------
    def _apply(self, msg: Response) -> None:
        st = self._state
        if isinstance(msg, Progress):
            st.percent = msg.percent
        elif isinstance(msg, Result):
            src = st.source
            st.status = JobStatus.COMPLETED
            st.percent = 100
            st.error = None
            st.digest_hex = msg.digest_hex
            st.result = HashResult(
                digest_hex=msg.digest_hex,
                file_name=src.name if src is not None else "",
                file_size=src.total_size if src is not None else 0,
                description=st.description,
                computed_at=datetime.now(timezone.utc),
            )
            _LOGGER.info(
                "Job on %s completed in %.2fs: %s",
                st.result.file_name,
                time.monotonic() - st.started_at,
                msg.digest_hex,
            )
        elif isinstance(msg, Error):
            st.status = JobStatus.ERROR
            st.percent = 0
            st.error = msg.message or MESSAGES["errors"]["computation_failed"]
            _LOGGER.warning("Job on %s failed: %s", st.source.name if st.source else "?", st.error)
        else:
            raise TypeError(f"Unknown response: {msg!r}")
        self._notify()

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                # A broken listener must not abort the batch being applied
                _LOGGER.exception("Snapshot listener %r failed", listener)
