"""
Tests for layered settings loading.

Each test builds its own config directory so layers can be combined freely.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from common.settings import AppSettings, load_settings, merge_settings, settings_from_environ


def write_json(path: Path, data: dict) -> None:
    path.write_text(json.dumps(data))


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_base_file_only(self, config_dir, orders_url, update_url, alert_url):
        settings = load_settings(config_dir=config_dir, environ={})

        assert settings.api_settings.orders_api_url == orders_url
        assert settings.api_settings.update_api_url == update_url
        assert settings.api_settings.alert_api_url == alert_url
        assert settings.log_level == "INFO"
        assert settings.request_timeout == 30.0
        assert settings.environment is None

    def test_missing_base_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(config_dir=tmp_path, environ={})

    def test_environment_file_overrides_base(self, config_dir):
        write_json(config_dir / "appsettings.Local.json", {
            "ApiSettings": {"AlertApiUrl": "http://localhost:5002/alerts"},
        })

        settings = load_settings(config_dir=config_dir, environment="Local", environ={})

        assert settings.environment == "Local"
        assert settings.api_settings.alert_api_url == "http://localhost:5002/alerts"
        # untouched keys in the same section survive the merge
        assert settings.api_settings.orders_api_url.startswith("https://orders.test")

    def test_environment_from_variable(self, config_dir):
        write_json(config_dir / "appsettings.Staging.json", {"LogLevel": "Warning"})

        settings = load_settings(config_dir=config_dir, environ={"SYNAPSE_ENVIRONMENT": "Staging"})

        assert settings.environment == "Staging"
        assert settings.log_level == "WARNING"

    def test_missing_environment_file_is_fine(self, config_dir):
        settings = load_settings(config_dir=config_dir, environment="Nowhere", environ={})
        assert settings.environment == "Nowhere"

    def test_local_settings_file(self, config_dir):
        write_json(config_dir / "local.settings.json", {"RequestTimeout": 5})

        settings = load_settings(config_dir=config_dir, environ={})

        assert settings.request_timeout == 5.0

    def test_environment_variables_override_files(self, config_dir):
        environ = {
            "ApiSettings__OrdersApiUrl": "https://env.test/orders",
            "LOG_LEVEL": "debug",
            "UNRELATED": "ignored",
        }

        settings = load_settings(config_dir=config_dir, environ=environ)

        assert settings.api_settings.orders_api_url == "https://env.test/orders"
        assert settings.log_level == "DEBUG"

    def test_overrides_win(self, config_dir):
        settings = load_settings(
            config_dir=config_dir,
            overrides={"ApiSettings": {"UpdateApiUrl": "https://cli.test/update"}},
            environ={"ApiSettings__UpdateApiUrl": "https://env.test/update"},
        )

        assert settings.api_settings.update_api_url == "https://cli.test/update"

    def test_keys_are_case_insensitive(self, tmp_path):
        write_json(tmp_path / "appsettings.json", {
            "apiSettings": {"ordersApiUrl": "https://lower.test/orders"},
        })
        write_json(tmp_path / "local.settings.json", {
            "APISETTINGS": {"ORDERSAPIURL": "https://upper.test/orders"},
        })

        settings = load_settings(config_dir=tmp_path, environ={})

        assert settings.api_settings.orders_api_url == "https://upper.test/orders"

    def test_invalid_timeout_rejected(self, config_dir):
        write_json(config_dir / "local.settings.json", {"RequestTimeout": 0})

        with pytest.raises(ValidationError):
            load_settings(config_dir=config_dir, environ={})

    def test_non_object_file_rejected(self, tmp_path):
        (tmp_path / "appsettings.json").write_text("[]")

        with pytest.raises(ValueError, match="JSON object"):
            load_settings(config_dir=tmp_path, environ={})


class TestLogLevel:
    """Tests for log level normalization."""

    @pytest.mark.parametrize(
        "value, expected",
        [("Information", "INFO"), ("Trace", "DEBUG"), ("warning", "WARNING"), ("None", "CRITICAL")],
    )
    def test_level_names(self, value, expected):
        assert AppSettings(log_level=value).log_level == expected

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="chatty")


class TestHelpers:
    """Tests for the merge and environment helpers."""

    def test_merge_is_deep(self):
        merged = merge_settings(
            {"ApiSettings": {"OrdersApiUrl": "a", "AlertApiUrl": "b"}},
            {"apisettings": {"AlertApiUrl": "c"}},
        )

        assert merged == {"ApiSettings": {"OrdersApiUrl": "a", "AlertApiUrl": "c"}}

    def test_merge_does_not_mutate_base(self):
        base = {"ApiSettings": {"OrdersApiUrl": "a"}}

        merge_settings(base, {"ApiSettings": {"OrdersApiUrl": "b"}})

        assert base == {"ApiSettings": {"OrdersApiUrl": "a"}}

    def test_environ_nested_sections(self):
        result = settings_from_environ({
            "ApiSettings__AlertApiUrl": "https://alerts.env",
            "RequestTimeout": "12",
            "PATH": "/usr/bin",
            "Environment": "Prod",
        })

        assert result == {
            "ApiSettings": {"AlertApiUrl": "https://alerts.env"},
            "RequestTimeout": "12",
        }
