from __future__ import annotations

import threading

import pytest

from streamhash.source import BytesSource


class CountingSource(BytesSource):
    """BytesSource that records every (offset, length) read."""

    def __init__(self, data: bytes, name: str = "counting.bin") -> None:
        super().__init__(data, name=name)
        self.reads: list[tuple[int, int]] = []

    def read(self, offset: int, length: int) -> bytes:
        self.reads.append((offset, length))
        return super().read(offset, length)


class GatedSource(BytesSource):
    """Blocks the read at ``gate_offset`` until ``release`` is set."""

    def __init__(self, data: bytes, gate_offset: int, name: str = "gated.bin") -> None:
        super().__init__(data, name=name)
        self.gate_offset = gate_offset
        self.reached = threading.Event()
        self.release = threading.Event()

    def read(self, offset: int, length: int) -> bytes:
        if offset == self.gate_offset:
            self.reached.set()
            assert self.release.wait(10), "gate never released"
        return super().read(offset, length)


class FailingSource(BytesSource):
    """Raises ``OSError`` when reading at or past ``fail_offset``."""

    def __init__(self, data: bytes, fail_offset: int, name: str = "failing.bin") -> None:
        super().__init__(data, name=name)
        self.fail_offset = fail_offset

    def read(self, offset: int, length: int) -> bytes:
        if offset >= self.fail_offset:
            raise PermissionError(13, "Permission denied")
        return super().read(offset, length)


@pytest.fixture
def sample_bytes() -> bytes:
    return bytes((i * 31 + 7) % 256 for i in range(5000))
