"""Worker-side digest pipeline: ChunkReader -> IncrementalHasher -> ProgressReporter.

`run_digest_pipeline` runs one job to completion on whatever thread calls it
and reports through ``emit``. It never raises for I/O or hashing failures;
those become a single `Error` response.
"""

from __future__ import annotations

import logging
import time
from threading import Event
from typing import Callable

from streamhash.config import MESSAGES
from streamhash.hasher import IncrementalHasher
from streamhash.messages import ComputeDigest, Error, Progress, Response, Result
from streamhash.progress import ProgressReporter
from streamhash.source import ChunkReader
from streamhash.utils import format_bytes


_LOGGER = logging.getLogger(__name__)


def run_digest_pipeline(
    request: ComputeDigest,
    emit: Callable[[Response], None],
    cancel: Event | None = None,
) -> str | None:
    """Hash ``request.source`` in ``request.chunk_size`` pieces.

    Parameters
    ----------
    request:
        The job to run.
    emit:
        Receives `Progress` events, then exactly one `Result` or `Error`.
    cancel:
        Optional stop token checked between chunk reads. When set, the
        pipeline returns quietly without emitting anything further.

    Returns
    -------
    The hex digest on success, ``None`` on failure or early stop.
    """

    source = request.source
    chunk_size = int(request.chunk_size)
    try:
        reader = ChunkReader(source)
        total = reader.total_size
        hasher = IncrementalHasher()
        reporter = ProgressReporter(total, lambda p: emit(Progress(p)))
        _LOGGER.info("Starting digest of %s (%s, chunk %s)", source.name, format_bytes(total), format_bytes(chunk_size))

        offset = 0
        while offset < total:
            if cancel is not None and cancel.is_set():
                _LOGGER.info("Digest of %s stopped at offset %d", source.name, offset)
                return None
            t0 = time.perf_counter()
            chunk = reader.next(offset, chunk_size)
            t1 = time.perf_counter()
            hasher.update(chunk)
            offset += len(chunk)
            _LOGGER.debug(
                "Chunk %d: %d bytes at offset %d (read %.1fms, hash %.1fms)",
                reader.chunks_read,
                len(chunk),
                offset - len(chunk),
                (t1 - t0) * 1000,
                (time.perf_counter() - t1) * 1000,
            )
            reporter.advance(len(chunk))

        reporter.finish()
        digest = hasher.finalize()
        _LOGGER.info("Digest of %s: %s (%d chunks)", source.name, digest, reader.chunks_read)
        emit(Result(digest))
        return digest
    except Exception as e:
        _LOGGER.exception("Digest of %s failed", source.name)
        emit(Error(str(e) or MESSAGES["errors"]["computation_failed"]))
        return None
