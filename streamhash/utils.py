"""Shared helpers for byte formatting and one-shot hashing."""

from __future__ import annotations

from hashlib import sha256 as _sha256

_UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB")


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Return a human-readable size, e.g. ``1536 -> "1.5 KB"``.

    Parameters
    ----------
    num_bytes:
        Size in bytes (binary multiples of 1024).
    decimals:
        Maximum number of decimal places; trailing zeros are dropped.
    """

    if num_bytes <= 0:
        return "0 Bytes"
    # Integer comparison avoids float log error at exact powers of 1024
    i = 0
    while i < len(_UNITS) - 1 and num_bytes >= 1024 ** (i + 1):
        i += 1
    value = round(num_bytes / (1024**i), decimals)
    return f"{value:g} {_UNITS[i]}"


def sha256_bytes(data: bytes) -> str:
    """Return the SHA256 hex digest of ``data`` in a single pass."""

    return _sha256(data).hexdigest()
