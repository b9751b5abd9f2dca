"""Tests for settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sessionkeeper.config import DEFAULT_PREVIEW_CHARS, MAX_SCAN_WORKERS, Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ROOT", "PREVIEW_CHARS", "MAX_WORKERS", "LOG_LEVEL"):
        monkeypatch.delenv(f"SESSIONKEEPER_{name}", raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.root is None
        assert settings.preview_chars == DEFAULT_PREVIEW_CHARS
        assert settings.log_level == "WARNING"
        assert 1 <= settings.scan_workers <= MAX_SCAN_WORKERS

    def test_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SESSIONKEEPER_ROOT", str(tmp_path))
        monkeypatch.setenv("SESSIONKEEPER_PREVIEW_CHARS", "500")
        monkeypatch.setenv("SESSIONKEEPER_MAX_WORKERS", "3")
        monkeypatch.setenv("SESSIONKEEPER_LOG_LEVEL", "debug")

        settings = Settings()
        assert settings.root == tmp_path
        assert settings.preview_chars == 500
        assert settings.scan_workers == 3
        assert settings.log_level == "DEBUG"

    def test_rejects_non_positive_preview(self):
        with pytest.raises(ValidationError):
            Settings(preview_chars=0)

    def test_rejects_zero_workers(self):
        with pytest.raises(ValidationError):
            Settings(max_workers=0)


class TestGetSettings:
    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("SESSIONKEEPER_ROOT", "/from/env")
        assert get_settings(root=None).root == Path("/from/env")

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("SESSIONKEEPER_ROOT", "/from/env")
        assert get_settings(root=Path("/from/flag")).root == Path("/from/flag")
