"""Unit tests for settings loading.

Tests cover:
- Defaults when no file or environment is given
- JSON file values and environment overrides
- Each ConfigError type
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from cabinet_pricing.application.config import ClientSettings, ConfigError, load_settings
from cabinet_pricing.application.config.settings import _setting_name


def write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadSettings:
    def test_defaults(self) -> None:
        settings = load_settings(environ={})
        assert settings.base_url == "http://127.0.0.1:8000/"
        assert settings.page_size == 20
        assert settings.tax_rate == Decimal("0.18")
        assert settings.currency == "INR"

    def test_file_values(self, tmp_path: Path) -> None:
        path = write(tmp_path, '{"base_url": "https://pricing.example.com", "page_size": 50}')
        settings = load_settings(path, environ={})
        assert settings.base_url == "https://pricing.example.com"
        assert settings.page_size == 50

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        path = write(tmp_path, '{"timeout": 30, "page_size": 50}')
        settings = load_settings(
            path,
            environ={
                "CABINET_PRICING_PAGE_SIZE": "100",
                "CABINET_PRICING_BASE_URL": "http://backend:8000",
                "CABINET_PRICING_TIMEOUT": "",
            },
        )
        assert settings.page_size == 100
        assert settings.base_url == "http://backend:8000"
        assert settings.timeout == 30

    def test_api_client_uses_settings(self) -> None:
        api = ClientSettings(base_url="http://backend:8000/", timeout=3).api_client()
        assert api.base_url == "http://backend:8000"
        assert api.timeout == 3


class TestConfigErrors:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(tmp_path / "nope.json", environ={})
        assert exc_info.value.error_type == "file_not_found"
        assert "Settings file not found" in str(exc_info.value)

    def test_invalid_json_reports_position(self, tmp_path: Path) -> None:
        path = write(tmp_path, '{\n  "page_size": ,\n}')
        with pytest.raises(ConfigError) as exc_info:
            load_settings(path, environ={})
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 2
        assert "line 2" in error.message

    def test_non_object_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(write(tmp_path, "[1, 2]"), environ={})
        assert exc_info.value.error_type == "validation"

    def test_field_validation(self, tmp_path: Path) -> None:
        path = write(tmp_path, '{"base_url": "ftp://x", "page_size": 0}')
        with pytest.raises(ConfigError) as exc_info:
            load_settings(path, environ={})
        error = exc_info.value
        assert error.error_type == "validation"
        assert error.message.startswith("Settings validation failed:")
        assert {d["path"] for d in error.details} == {"base_url", "page_size"}
        assert {d["source"] for d in error.details} == {str(path)}
        assert f"got 0 from {path}" in error.message

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(write(tmp_path, '{"colour": "red"}'), environ={})
        assert exc_info.value.details[0]["path"] == "colour"

    def test_bad_environment_value(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_settings(environ={"CABINET_PRICING_TIMEOUT": "soon"})
        assert exc_info.value.details[0]["path"] == "timeout"
        assert exc_info.value.details[0]["source"] == "CABINET_PRICING_TIMEOUT"
        assert "got 'soon' from CABINET_PRICING_TIMEOUT" in exc_info.value.message


def test_setting_name() -> None:
    assert _setting_name(("timeout",)) == "timeout"
    assert _setting_name(()) == "(settings)"
