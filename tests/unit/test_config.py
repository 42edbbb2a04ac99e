"""Tests for loader settings — env-driven configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from depconstrain.config import ConstrainSettings


class TestConstrainSettings:
    def test_defaults(self):
        settings = ConstrainSettings()
        assert settings.xml_file_name == "constraints.xml"
        assert settings.json_file_name == "constraints.json"
        assert settings.strict_sort is True
        assert settings.read_chunk_size == 8192
        assert settings.supported_version == "1.0.0"
        assert settings.log_level == "WARNING"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DEPCONSTRAIN_STRICT_SORT", "false")
        monkeypatch.setenv("DEPCONSTRAIN_JSON_FILE_NAME", "deps.json")
        settings = ConstrainSettings()
        assert settings.strict_sort is False
        assert settings.json_file_name == "deps.json"

    def test_explicit_values_win_over_env(self, monkeypatch):
        monkeypatch.setenv("DEPCONSTRAIN_STRICT_SORT", "false")
        assert ConstrainSettings(strict_sort=True).strict_sort is True

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            ConstrainSettings(read_chunk_size=0)

    def test_is_frozen(self):
        settings = ConstrainSettings()
        with pytest.raises(ValidationError):
            settings.strict_sort = False
