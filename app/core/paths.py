from __future__ import annotations

import os
from pathlib import Path


def app_base_dir() -> Path:
    root = os.environ.get("STREAMHASH_HOME") or os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA") or os.getcwd()
    base = Path(root) / "StreamHash"
    base.mkdir(parents=True, exist_ok=True)
    return base


def logs_dir() -> Path:
    d = app_base_dir() / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d
