from pathlib import Path

import pytest

from app.core import settings as settings_mod
from app.core.paths import app_base_dir, logs_dir
from streamhash.config import Config


@pytest.fixture(autouse=True)
def app_home(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("STREAMHASH_HOME", str(tmp_path))
    return tmp_path


def test_dirs_live_under_home(app_home: Path):
    assert app_base_dir() == app_home / "StreamHash"
    assert logs_dir().is_dir()


def test_defaults_when_missing():
    s = settings_mod.load_settings()
    assert s.chunk_size == Config.DEFAULT_CHUNK_SIZE
    assert s.max_file_size == Config.MAX_FILE_SIZE_BYTES


def test_save_and_load():
    s = settings_mod.Settings(chunk_size=8 * 1024 * 1024, max_file_size=0)
    settings_mod.save_settings(s)
    loaded = settings_mod.load_settings()
    assert loaded == s


def test_corrupt_or_invalid_file_falls_back():
    path = settings_mod.settings_file()
    path.write_text("{not json", encoding="utf-8")
    assert settings_mod.load_settings() == settings_mod.Settings()

    path.write_text('{"chunk_size": -5}', encoding="utf-8")
    assert settings_mod.load_settings() == settings_mod.Settings()

    path.write_text("[1, 2]", encoding="utf-8")
    assert settings_mod.load_settings() == settings_mod.Settings()


def test_unknown_keys_ignored():
    settings_mod.settings_file().write_text('{"chunk_size": 4096, "theme": "dark"}', encoding="utf-8")
    assert settings_mod.load_settings().chunk_size == 4096
