import hashlib

import pytest

from streamhash.hasher import IncrementalHasher


def test_incremental_matches_one_shot(sample_bytes: bytes):
    h = IncrementalHasher()
    for i in range(0, len(sample_bytes), 333):
        h.update(sample_bytes[i : i + 333])

    assert h.finalize() == hashlib.sha256(sample_bytes).hexdigest()
    assert h.bytes_hashed == len(sample_bytes)


def test_order_matters():
    a = IncrementalHasher()
    a.update(b"ab")
    a.update(b"cd")
    b = IncrementalHasher()
    b.update(b"cd")
    b.update(b"ab")
    assert a.finalize() != b.finalize()


def test_empty_digest():
    assert IncrementalHasher().finalize() == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_update_after_finalize_fails():
    h = IncrementalHasher()
    h.finalize()
    assert h.finalized
    with pytest.raises(RuntimeError):
        h.update(b"late")


def test_finalize_twice_fails():
    h = IncrementalHasher()
    h.finalize()
    with pytest.raises(RuntimeError):
        h.finalize()
