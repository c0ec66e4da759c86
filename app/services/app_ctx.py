from __future__ import annotations

from app.core.settings import load_settings
from app.services.hash_session import HashSession


def new_session(parent=None) -> HashSession:
    """Build an independent session configured from the saved settings."""

    s = load_settings()
    return HashSession(
        max_size=s.max_file_size or None,
        chunk_size=s.chunk_size,
        parent=parent,
    )
