"""Request/response messages exchanged across the worker channel.

The set of variants is closed: one request (`ComputeDigest`) and three
responses (`Progress`, `Result`, `Error`). Each variant has a dict wire form
tagged by ``kind``; the byte source itself never goes on the wire.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from streamhash.config import Config
from streamhash.source import Source

_HEX_DIGEST = re.compile(rf"^[0-9a-f]{{{Config.DIGEST_HEX_LENGTH}}}$")


@dataclass(frozen=True)
class ComputeDigest:
    kind: ClassVar[str] = "computeDigest"

    source: Source = field(compare=False)
    chunk_size: int

    def __post_init__(self) -> None:
        if int(self.chunk_size) <= 0:
            raise ValueError("chunk_size must be a positive number of bytes")

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "chunkSizeBytes": int(self.chunk_size)}


@dataclass(frozen=True)
class Progress:
    kind: ClassVar[str] = "progress"

    percent: int

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            raise ValueError(f"percent out of range: {self.percent}")

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "percent": int(self.percent)}


@dataclass(frozen=True)
class Result:
    kind: ClassVar[str] = "result"

    digest_hex: str

    def __post_init__(self) -> None:
        if not _HEX_DIGEST.match(self.digest_hex):
            raise ValueError(
                f"digest must be {Config.DIGEST_HEX_LENGTH} lowercase hex characters, got {self.digest_hex!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "digestHex": self.digest_hex}


@dataclass(frozen=True)
class Error:
    kind: ClassVar[str] = "error"

    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


Response = Union[Progress, Result, Error]


def response_from_dict(msg: dict[str, Any]) -> Response:
    """Parse a response wire dict; raises ``ValueError`` on unknown or malformed input."""

    if not isinstance(msg, dict):
        raise ValueError(f"Response must be a dict, got {type(msg).__name__}")
    kind = msg.get("kind")
    try:
        if kind == Progress.kind:
            return Progress(percent=int(msg["percent"]))
        if kind == Result.kind:
            return Result(digest_hex=str(msg["digestHex"]))
        if kind == Error.kind:
            return Error(message=str(msg["message"]))
    except KeyError as e:
        raise ValueError(f"Response of kind {kind!r} is missing field {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise ValueError(f"Malformed response of kind {kind!r}: {e}") from e
    raise ValueError(f"Unknown response kind: {kind!r}")
