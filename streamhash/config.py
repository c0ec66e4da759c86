"""Centralized configuration for the streaming digest engine.

Defines immutable defaults for chunking, size policy, and polling, plus the
user-facing message table shared by the CLI and the desktop front end.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Chunking
    DEFAULT_CHUNK_SIZE: int = 64 * 1024 * 1024  # 64 MiB

    # Size policy
    MAX_FILE_SIZE_BYTES: int = 10 * 1024 * 1024 * 1024  # 10 GiB
    MAX_DESCRIPTION_LENGTH: int = 500

    # Controller polling
    POLL_INTERVAL_SECONDS: float = 0.05

    # Digest
    ALGORITHM: str = "sha256"
    DIGEST_HEX_LENGTH: int = 64


DEFAULT_CHUNK_SIZE: int = Config.DEFAULT_CHUNK_SIZE
MAX_FILE_SIZE_BYTES: int = Config.MAX_FILE_SIZE_BYTES

MESSAGES: dict[str, dict[str, str]] = {
    "errors": {
        "file_too_large": "File size exceeds the maximum allowed size of {limit}.",
        "description_too_long": "Description exceeds the maximum length of {limit} characters.",
        "no_file_selected": "Please select a file to compute hash.",
        "computation_failed": "Hash computation failed. Please try again.",
        "file_read_error": "Failed to read file. Please try again.",
    },
    "success": {
        "hash_computed": "Hash computed successfully!",
        "hash_copied": "Hash copied to clipboard!",
    },
}


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON
