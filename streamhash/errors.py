"""Exception taxonomy for the digest engine."""

from __future__ import annotations


class StreamHashError(Exception):
    """Base class for all engine errors."""


class ValidationError(StreamHashError, ValueError):
    """A source or description was rejected before any job started."""


class SourceReadError(StreamHashError, OSError):
    """A chunk could not be read from the source mid-job."""


class ProtocolViolation(StreamHashError, RuntimeError):
    """A caller broke the one-job-per-channel or ordered-read contract."""


class InvalidTransition(StreamHashError, RuntimeError):
    """The controller was asked for a transition its current state forbids."""
