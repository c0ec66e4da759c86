from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path

from app.core.paths import app_base_dir
from streamhash.config import Config


_LOGGER = logging.getLogger(__name__)


def settings_file() -> Path:
    return app_base_dir() / "settings.json"


@dataclass
class Settings:
    chunk_size: int = Config.DEFAULT_CHUNK_SIZE
    max_file_size: int = Config.MAX_FILE_SIZE_BYTES  # 0 -> unlimited


def _default_settings() -> Settings:
    return Settings()


def load_settings() -> Settings:
    path = settings_file()
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("settings root must be an object")
            known = {k: v for k, v in data.items() if k in asdict(_default_settings())}
            s = Settings(**{**asdict(_default_settings()), **known})
            if int(s.chunk_size) <= 0 or int(s.max_file_size) < 0:
                raise ValueError(f"out-of-range values: {s}")
            return s
    except (OSError, ValueError, TypeError) as e:
        _LOGGER.warning("Ignoring unreadable settings file %s: %s", path, e)
    return _default_settings()


def save_settings(s: Settings) -> None:
    path = settings_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(s), ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        # Best-effort; the session keeps running with in-memory values
        _LOGGER.warning("Could not save settings to %s: %s", path, e)
