import pytest

from streamhash.utils import format_bytes, sha256_bytes


@pytest.mark.parametrize(
    "num,expected",
    [
        (0, "0 Bytes"),
        (500, "500 Bytes"),
        (1023, "1023 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1 MB"),
        (1024 * 1024 * 3 // 2, "1.5 MB"),
        (1234567, "1.18 MB"),
        (1024**3, "1 GB"),
        (10 * 1024**3, "10 GB"),
        (1024**4, "1 TB"),
    ],
)
def test_format_bytes(num: int, expected: str):
    assert format_bytes(num) == expected


def test_sha256_bytes():
    assert sha256_bytes(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
