"""Percent-complete signal derived from bytes processed over total size."""

from __future__ import annotations

from typing import Callable


def compute_percent(done: int, total: int) -> int:
    """Return ``done / total`` as a whole percent, halves rounded up, capped at 100.

    Integer arithmetic keeps the result exact for very large sizes. An empty
    source is 100% done.
    """

    if total <= 0:
        return 100
    return min(100, (200 * done + total) // (2 * total))


class ProgressReporter:
    """Emit deduplicated, non-decreasing percent values for one job.

    Parameters
    ----------
    total_size:
        Fixed size of the source in bytes.
    emit:
        Called with each new percent value.
    """

    def __init__(self, total_size: int, emit: Callable[[int], None]) -> None:
        self.total_size = total_size
        self.bytes_processed = 0
        self.last_emitted: int | None = None
        self._emit = emit

    def advance(self, nbytes: int) -> None:
        self.bytes_processed += nbytes
        self._maybe_emit(compute_percent(self.bytes_processed, self.total_size))

    def finish(self) -> None:
        """Force 100, delivered exactly once per job."""

        self._maybe_emit(100)

    def _maybe_emit(self, percent: int) -> None:
        if self.last_emitted is not None and percent <= self.last_emitted:
            return
        self.last_emitted = percent
        self._emit(percent)
