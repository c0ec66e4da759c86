"""Size and description policy checks run before a job starts."""

from __future__ import annotations

from streamhash.config import MESSAGES
from streamhash.errors import ValidationError
from streamhash.utils import format_bytes


def check_size(total_size: int, max_allowed: int | None) -> bool:
    """Return True if ``total_size`` is within ``max_allowed`` (inclusive)."""

    if total_size < 0:
        return False
    return max_allowed is None or total_size <= max_allowed


def validate_size(total_size: int, max_allowed: int | None) -> None:
    if not check_size(total_size, max_allowed):
        if total_size < 0:
            raise ValidationError(f"Invalid source size: {total_size}")
        limit = format_bytes(max_allowed)
        raise ValidationError(
            MESSAGES["errors"]["file_too_large"].format(limit=limit)
            + f" ({total_size} bytes > {max_allowed} bytes)"
        )


def validate_description(text: str, max_length: int | None) -> None:
    if max_length is not None and len(text) > max_length:
        raise ValidationError(MESSAGES["errors"]["description_too_long"].format(limit=max_length))
