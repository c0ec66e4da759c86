from pathlib import Path

import pytest

from streamhash.errors import ProtocolViolation, SourceReadError
from streamhash.source import BytesSource, ChunkReader, FileSource

from conftest import CountingSource, FailingSource


def test_file_source_reads_ranges(tmp_path: Path):
    p = tmp_path / "data.bin"
    p.write_bytes(b"0123456789")
    src = FileSource(p)

    assert src.total_size == 10
    assert src.name == "data.bin"
    assert src.read(3, 4) == b"3456"


def test_file_source_missing_file(tmp_path: Path):
    with pytest.raises(SourceReadError):
        FileSource(tmp_path / "nope.bin")


def test_next_returns_full_then_partial_chunk():
    reader = ChunkReader(BytesSource(b"abcdefghij"))

    assert reader.next(0, 4) == b"abcd"
    assert reader.next(4, 4) == b"efgh"
    assert reader.next(8, 4) == b"ij"
    assert reader.chunks_read == 3


def test_next_at_end_returns_empty():
    reader = ChunkReader(BytesSource(b"abc"))
    assert reader.next(3, 10) == b""


def test_out_of_order_read_rejected():
    reader = ChunkReader(BytesSource(b"abcdefgh"))
    reader.next(0, 4)
    with pytest.raises(ProtocolViolation):
        reader.next(0, 4)
    with pytest.raises(ProtocolViolation):
        reader.next(2, 4)


def test_invalid_max_len():
    reader = ChunkReader(BytesSource(b"abc"))
    with pytest.raises(ValueError):
        reader.next(0, 0)


def test_unreadable_source_raises_source_read_error():
    reader = ChunkReader(FailingSource(b"x" * 100, fail_offset=50))
    assert len(reader.next(0, 50)) == 50
    with pytest.raises(SourceReadError) as exc:
        reader.next(50, 50)
    assert "Permission denied" in str(exc.value)
    assert isinstance(exc.value, OSError)


def test_truncated_file_is_short_read(tmp_path: Path):
    p = tmp_path / "shrinks.bin"
    p.write_bytes(b"x" * 100)
    src = FileSource(p)
    p.write_bytes(b"x" * 60)

    reader = ChunkReader(src)
    assert len(reader.next(0, 50)) == 50
    with pytest.raises(SourceReadError, match="Short read"):
        reader.next(50, 50)


def test_iter_chunks_reads_each_range_once():
    src = CountingSource(b"A" * 10)
    chunks = list(ChunkReader(src).iter_chunks(3))

    assert chunks == [b"AAA", b"AAA", b"AAA", b"A"]
    assert src.reads == [(0, 3), (3, 3), (6, 3), (9, 1)]


def test_iter_chunks_empty_source():
    assert list(ChunkReader(BytesSource(b"")).iter_chunks(8)) == []
