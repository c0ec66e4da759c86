import hashlib
import time

import pytest

from streamhash.channel import WorkerChannel
from streamhash.errors import ProtocolViolation
from streamhash.messages import ComputeDigest, Error, Progress, Result
from streamhash.source import BytesSource

from conftest import FailingSource, GatedSource


def _drain(channel: WorkerChannel, timeout: float = 5.0) -> list:
    out = []
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        out.extend(channel.receive(timeout=0.05))
        if out and isinstance(out[-1], (Result, Error)):
            break
    return out


def test_send_runs_pipeline_off_thread(sample_bytes: bytes):
    ch = WorkerChannel()
    ch.send(ComputeDigest(BytesSource(sample_bytes), 512))
    events = _drain(ch)

    assert events[-1] == Result(hashlib.sha256(sample_bytes).hexdigest())
    assert events[-2] == Progress(100)
    assert ch.join(5)
    assert not ch.is_busy


def test_receive_without_timeout_does_not_block():
    ch = WorkerChannel()
    t0 = time.monotonic()
    assert ch.receive() == []
    assert time.monotonic() - t0 < 0.5


def test_second_send_is_protocol_violation():
    src = GatedSource(b"x" * 100, gate_offset=50)
    ch = WorkerChannel()
    ch.send(ComputeDigest(src, 10))
    assert src.reached.wait(5)

    with pytest.raises(ProtocolViolation):
        ch.send(ComputeDigest(BytesSource(b"other"), 10))

    # The in-flight job is stopped and the channel ends with one Error
    src.release.set()
    assert ch.join(5)
    events = ch.receive()
    assert not any(isinstance(e, Result) for e in events)
    assert isinstance(events[-1], Error)
    assert "second ComputeDigest" in events[-1].message
    assert sum(isinstance(e, Error) for e in events) == 1
    with pytest.raises(ProtocolViolation):
        ch.send(ComputeDigest(BytesSource(b"again"), 10))
    assert ch.receive() == []


def test_send_after_completion_still_rejected():
    ch = WorkerChannel()
    ch.send(ComputeDigest(BytesSource(b"abc"), 10))
    assert ch.join(5)
    with pytest.raises(ProtocolViolation):
        ch.send(ComputeDigest(BytesSource(b"abc"), 10))

    # The finished job keeps its single terminal Result
    events = ch.receive()
    assert isinstance(events[-1], Result)
    assert not any(isinstance(e, Error) for e in events)


def test_send_on_discarded_channel_rejected():
    ch = WorkerChannel()
    ch.discard()
    assert ch.is_discarded
    with pytest.raises(ProtocolViolation):
        ch.send(ComputeDigest(BytesSource(b"abc"), 10))


def test_discard_does_not_wait_and_hides_late_events():
    src = GatedSource(b"y" * 100, gate_offset=50)
    ch = WorkerChannel()
    ch.send(ComputeDigest(src, 10))
    assert src.reached.wait(5)

    t0 = time.monotonic()
    ch.discard()
    assert time.monotonic() - t0 < 0.5

    src.release.set()
    assert ch.join(5)
    assert ch.receive() == []
    assert ch.receive(timeout=0.1) == []


def test_read_error_becomes_error_response():
    ch = WorkerChannel()
    ch.send(ComputeDigest(FailingSource(b"z" * 30, fail_offset=0), 10))
    events = _drain(ch)

    assert len(events) == 1
    assert isinstance(events[0], Error)
