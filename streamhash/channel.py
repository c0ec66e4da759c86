from __future__ import annotations

import logging
import uuid
from concurrent.futures import Future, ThreadPoolExecutor, wait
from queue import Empty, SimpleQueue
from threading import Event, Lock

from streamhash.config import MESSAGES
from streamhash.errors import ProtocolViolation
from streamhash.messages import ComputeDigest, Error, Response, Result
from streamhash.pipeline import run_digest_pipeline


_LOGGER = logging.getLogger(__name__)


class WorkerChannel:
    """Message-passing boundary around one digest job.

    A channel carries exactly one `ComputeDigest` for its whole life. The
    pipeline runs on the channel's own worker thread and posts responses onto
    a queue that the owner drains with `receive`. Owners cancel a job by
    calling `discard` and dropping the channel; nothing is ever read from a
    discarded channel again.
    """

    def __init__(self) -> None:
        self.channel_id = uuid.uuid4().hex
        self._queue: SimpleQueue[Response] = SimpleQueue()
        self._stop = Event()
        self._executor: ThreadPoolExecutor | None = None
        self._future: Future | None = None
        self._discarded = False
        self._poisoned = False
        self._terminated = False
        self._lock = Lock()

    @property
    def is_busy(self) -> bool:
        return self._future is not None and not self._future.done()

    @property
    def is_started(self) -> bool:
        return self._future is not None

    @property
    def is_discarded(self) -> bool:
        return self._discarded

    def send(self, request: ComputeDigest) -> None:
        if self._discarded:
            raise ProtocolViolation(f"Channel {self.channel_id[:8]} has been discarded")
        if self._poisoned or self._future is not None:
            self._poison()
            raise ProtocolViolation(
                f"Channel {self.channel_id[:8]} already carries a job; a second ComputeDigest is not allowed"
            )
        if not isinstance(request, ComputeDigest):
            raise TypeError(f"Unsupported request: {type(request).__name__}")

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"streamhash-{self.channel_id[:8]}")
        self._future = self._executor.submit(run_digest_pipeline, request, self._post, self._stop)
        self._future.add_done_callback(self._on_done)
        # Lets the worker thread exit once the single job finishes
        self._executor.shutdown(wait=False)
        _LOGGER.debug("Channel %s: sent %s", self.channel_id[:8], request.to_dict())

    def receive(self, timeout: float | None = None) -> list[Response]:
        """Drain pending responses.

        With ``timeout=None`` this never blocks. Otherwise it waits up to
        ``timeout`` seconds for the first response and then drains the rest.
        """

        out: list[Response] = []
        if self._discarded:
            return out
        if timeout is not None:
            try:
                out.append(self._queue.get(timeout=timeout))
            except Empty:
                return out
        while True:
            try:
                out.append(self._queue.get_nowait())
            except Empty:
                return out

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker to finish; True if it has (or never started)."""

        if self._future is None:
            return True
        done, _ = wait([self._future], timeout=timeout)
        return bool(done)

    def discard(self) -> None:
        """Abandon the channel without waiting for the worker."""

        if self._discarded:
            return
        self._discarded = True
        self._stop.set()
        _LOGGER.debug("Channel %s discarded", self.channel_id[:8])

    def _post(self, msg: Response) -> None:
        with self._lock:
            if self._terminated:
                return
            if isinstance(msg, (Result, Error)):
                self._terminated = True
            self._queue.put(msg)

    def _poison(self) -> None:
        """Stop the in-flight job and end the channel with a single `Error`."""

        self._stop.set()
        with self._lock:
            if self._poisoned:
                return
            self._poisoned = True
            if self._terminated:
                return
            self._terminated = True
            self._queue.put(Error(f"Channel {self.channel_id[:8]} received a second ComputeDigest; job aborted"))
        _LOGGER.warning("Channel %s: second request aborted the running job", self.channel_id[:8])

    def _on_done(self, fut: Future) -> None:
        # run_digest_pipeline reports its own failures; anything here escaped it
        exc = fut.exception()
        if exc is not None:
            _LOGGER.error("Channel %s: worker crashed: %s", self.channel_id[:8], exc)
            self._post(Error(str(exc) or MESSAGES["errors"]["computation_failed"]))

    def __repr__(self) -> str:
        state = "discarded" if self._discarded else "busy" if self.is_busy else "started" if self.is_started else "idle"
        return f"WorkerChannel({self.channel_id[:8]}, {state})"
