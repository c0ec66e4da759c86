from __future__ import annotations

import hashlib


class IncrementalHasher:
    """Order-sensitive SHA-256 accumulator over a stream of chunks.

    `update` must see chunks in source order; `finalize` is called once,
    after the last update. Breaking either rule raises `RuntimeError`.
    """

    def __init__(self) -> None:
        self._h = hashlib.sha256()
        self._digest: str | None = None
        self.bytes_hashed: int = 0

    @property
    def finalized(self) -> bool:
        return self._digest is not None

    def update(self, chunk: bytes) -> None:
        if self._digest is not None:
            raise RuntimeError("update() called after finalize()")
        self._h.update(chunk)
        self.bytes_hashed += len(chunk)

    def finalize(self) -> str:
        if self._digest is not None:
            raise RuntimeError("finalize() called twice")
        self._digest = self._h.hexdigest()
        return self._digest
