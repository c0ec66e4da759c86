"""
streamhash: stream SHA-256 digests of large files off the caller's thread.

Reads a byte source in fixed-size chunks, feeds an incremental hasher,
reports deduplicated percent-complete progress, and supports cancellation
by replacing the worker channel.
"""

__all__ = [
    "Config",
    "get_config",
    "__version__",
    # Errors
    "StreamHashError",
    "ValidationError",
    "SourceReadError",
    "ProtocolViolation",
    "InvalidTransition",
    # Sources (eager imports; lightweight)
    "Source",
    "FileSource",
    "BytesSource",
    "ChunkReader",
    # Engine (lazy-imported via __getattr__)
    "IncrementalHasher",
    "ProgressReporter",
    "WorkerChannel",
    "JobController",
    "JobStatus",
    "JobSnapshot",
    "HashResult",
    "run_digest_pipeline",
]

__version__ = "0.1.0"

from typing import Any

from streamhash.config import Config, get_config
from streamhash.errors import (
    StreamHashError,
    ValidationError,
    SourceReadError,
    ProtocolViolation,
    InvalidTransition,
)
from streamhash.source import Source, FileSource, BytesSource, ChunkReader


def __getattr__(name: str) -> Any:  # lazy attribute access keeps `import streamhash` thread-free
    if name == "IncrementalHasher":
        from streamhash.hasher import IncrementalHasher as _IH

        return _IH
    if name == "ProgressReporter":
        from streamhash.progress import ProgressReporter as _PR

        return _PR
    if name == "WorkerChannel":
        from streamhash.channel import WorkerChannel as _WC

        return _WC
    if name in {"JobController", "JobStatus", "JobSnapshot", "HashResult"}:
        from streamhash import controller as _ctl

        return getattr(_ctl, name)
    if name == "run_digest_pipeline":
        from streamhash.pipeline import run_digest_pipeline as _run

        return _run
    raise AttributeError(f"module 'streamhash' has no attribute {name!r}")
