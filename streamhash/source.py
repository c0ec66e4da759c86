"""Byte sources and the sequential chunk reader.

A `Source` is a read-only byte provider with a known size. The engine only
borrows it for the lifetime of one job; the caller owns it. `ChunkReader`
slices a source into ordered ranges and turns short or failed reads into
`SourceReadError`.

Example
-------
```python
reader = ChunkReader(FileSource(Path("big.iso")))
for chunk in reader.iter_chunks(64 * 1024 * 1024):
    hasher.update(chunk)
```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator

from streamhash.errors import ProtocolViolation, SourceReadError


class Source(ABC):
    """Abstract read-only byte provider with a fixed ``total_size``."""

    name: str = "<source>"

    @property
    @abstractmethod
    def total_size(self) -> int:
        """Size of the source in bytes."""

    @abstractmethod
    def read(self, offset: int, length: int) -> bytes:
        """Return up to ``length`` bytes starting at ``offset``.

        Implementations raise `OSError` (or a subclass) when the underlying
        data cannot be read.
        """


class FileSource(Source):
    """Source backed by a local file.

    Parameters
    ----------
    path:
        File to read. Its size is captured when the source is constructed;
        a file that shrinks afterwards surfaces as a short read.

    Notes
    -----
    Each `read` opens the file, seeks, and reads, so no handle outlives a
    chunk. An abandoned pipeline therefore never pins the file open.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.name = self.path.name
        try:
            self._size = self.path.stat().st_size
        except OSError as e:
            raise SourceReadError(f"Cannot access {self.path}: {e.strerror or e}") from e

    @property
    def total_size(self) -> int:
        return self._size

    def read(self, offset: int, length: int) -> bytes:
        with self.path.open("rb") as f:
            f.seek(offset)
            return f.read(length)

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r}, total_size={self._size})"


class BytesSource(Source):
    """In-memory source, mainly for tests and small payloads."""

    def __init__(self, data: bytes, name: str = "<bytes>") -> None:
        self._data = bytes(data)
        self.name = name

    @property
    def total_size(self) -> int:
        return len(self._data)

    def read(self, offset: int, length: int) -> bytes:
        return self._data[offset : offset + length]


class ChunkReader:
    """Sequentially slice a `Source` into fixed-size ranges.

    Reads must be requested at non-decreasing, non-overlapping offsets; a
    request behind the end of the previous chunk raises `ProtocolViolation`
    so no range is read twice within a job.
    """

    def __init__(self, source: Source) -> None:
        self.source = source
        self.total_size: int = source.total_size
        self.chunks_read: int = 0
        self._next_allowed: int = 0

    def next(self, offset: int, max_len: int) -> bytes:
        """Return up to ``max_len`` bytes at ``offset``.

        Fewer bytes are returned only for the final range of the source.
        """

        if max_len <= 0:
            raise ValueError("max_len must be positive")
        if offset < self._next_allowed:
            raise ProtocolViolation(
                f"Out-of-order read at offset {offset}; next readable offset is {self._next_allowed}"
            )
        if offset >= self.total_size:
            return b""

        expected = min(max_len, self.total_size - offset)
        try:
            data = self.source.read(offset, expected)
        except SourceReadError:
            raise
        except OSError as e:
            raise SourceReadError(f"Failed to read {self.source.name} at offset {offset}: {e}") from e
        if len(data) != expected:
            raise SourceReadError(
                f"Short read from {self.source.name} at offset {offset}: "
                f"expected {expected} bytes, got {len(data)} (source truncated?)"
            )
        self.chunks_read += 1
        self._next_allowed = offset + len(data)
        return data

    def iter_chunks(self, chunk_size: int) -> Iterator[bytes]:
        """Yield successive chunks from offset 0 to the end of the source."""

        offset = 0
        while offset < self.total_size:
            chunk = self.next(offset, chunk_size)
            offset += len(chunk)
            yield chunk
