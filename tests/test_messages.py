import pytest

from streamhash.messages import ComputeDigest, Error, Progress, Result, response_from_dict
from streamhash.source import BytesSource

DIGEST = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_request_wire_form_omits_source():
    req = ComputeDigest(BytesSource(b"abc"), chunk_size=1024)
    assert req.to_dict() == {"kind": "computeDigest", "chunkSizeBytes": 1024}


def test_request_rejects_non_positive_chunk():
    with pytest.raises(ValueError):
        ComputeDigest(BytesSource(b""), chunk_size=0)


def test_response_wire_forms():
    assert Progress(42).to_dict() == {"kind": "progress", "percent": 42}
    assert Result(DIGEST).to_dict() == {"kind": "result", "digestHex": DIGEST}
    assert Error("boom").to_dict() == {"kind": "error", "message": "boom"}


def test_response_from_dict_parses_each_variant():
    assert response_from_dict({"kind": "progress", "percent": 7}) == Progress(7)
    assert response_from_dict({"kind": "result", "digestHex": DIGEST}) == Result(DIGEST)
    assert response_from_dict({"kind": "error", "message": "x"}) == Error("x")


@pytest.mark.parametrize(
    "msg",
    [
        {"kind": "nope"},
        {"kind": "progress"},
        {"kind": "progress", "percent": 101},
        {"kind": "progress", "percent": None},
        {"kind": "progress", "percent": "abc"},
        {"kind": "result", "digestHex": None},
        {"kind": "result", "digestHex": DIGEST.upper()},
        {"kind": "result", "digestHex": DIGEST[:63]},
        ["progress", 1],
    ],
)
def test_response_from_dict_rejects_malformed(msg):
    with pytest.raises(ValueError):
        response_from_dict(msg)
