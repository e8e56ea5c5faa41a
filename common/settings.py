"""
Layered configuration for the alert job.

Settings are merged from, in increasing priority:
1. appsettings.json                 (required)
2. appsettings.{Environment}.json   (optional)
3. local.settings.json              (optional)
4. Environment variables            (Section__Key, e.g. ApiSettings__AlertApiUrl)
5. Explicit overrides               (command-line options)

Design decisions:
- Pydantic models validate the merged result, same as the domain models
- Keys are matched case-insensitively at every layer
- Nested sections are deep-merged so a later layer can override one key
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_pascal

from common.models import match_field_keys


ENVIRONMENT_VARIABLE = "SYNAPSE_ENVIRONMENT"
BASE_SETTINGS_FILE = "appsettings.json"
LOCAL_SETTINGS_FILE = "local.settings.json"
SECTION_SEPARATOR = "__"

# Level names used by existing appsettings files
LOG_LEVEL_ALIASES = {
    "TRACE": "DEBUG",
    "INFORMATION": "INFO",
    "NONE": "CRITICAL",
}


class ApiSettings(BaseModel):
    """URLs of the three remote endpoints the job talks to."""
    orders_api_url: str = Field(default="", description="GET: list of orders")
    update_api_url: str = Field(default="", description="POST: persist one order")
    alert_api_url: str = Field(default="", description="POST: delivered item alert")

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return match_field_keys(cls, data)


class AppSettings(BaseModel):
    """Top-level application settings."""
    environment: Optional[str] = Field(default=None)
    api_settings: ApiSettings = Field(default_factory=ApiSettings)
    log_level: str = Field(default="INFO", description="Root logging level")
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds for outbound HTTP"
    )

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return match_field_keys(cls, data)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        level = LOG_LEVEL_ALIASES.get(level, level)
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


def _load_json(path: Path, required: bool = False) -> dict[str, Any]:
    """Load one settings file. Missing optional files contribute nothing."""
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Settings file not found: {path}")
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object: {path}")
    return data


def _find_key(target: dict[str, Any], key: str) -> str:
    """Return the existing key in target that matches key ignoring case and underscores."""
    wanted = key.replace("_", "").lower()
    for existing in target:
        if existing.replace("_", "").lower() == wanted:
            return existing
    return key


def merge_settings(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Deep-merge override into a copy of base.

    Dict values are merged recursively; anything else replaces the base
    value. Keys are compared case-insensitively, the first spelling wins.
    """
    merged = dict(base)
    for key, value in override.items():
        existing = _find_key(merged, key)
        if isinstance(value, Mapping) and isinstance(merged.get(existing), dict):
            merged[existing] = merge_settings(merged[existing], value)
        elif isinstance(value, Mapping):
            merged[existing] = merge_settings({}, value)
        else:
            merged[existing] = value
    return merged


def settings_from_environ(environ: Mapping[str, str]) -> dict[str, Any]:
    """
    Pick settings out of environment variables.

    Only variables whose first Section__Key segment names a known top-level
    setting are used, e.g. ApiSettings__OrdersApiUrl or LogLevel. The first
    segment also matches with underscores, so LOG_LEVEL works too.
    """
    known = set()
    for name, field in AppSettings.model_fields.items():
        if name == "environment":
            # selected through SYNAPSE_ENVIRONMENT instead
            continue
        known.add(name.replace("_", "").lower())
        known.add((field.alias or name).lower())

    result: dict[str, Any] = {}
    for key, value in environ.items():
        parts = [part for part in key.split(SECTION_SEPARATOR) if part]
        if not parts or parts[0].replace("_", "").lower() not in known:
            continue

        nested: Any = value
        for part in reversed(parts[1:]):
            nested = {part: nested}
        result = merge_settings(result, {parts[0]: nested})
    return result


def load_settings(
    config_dir: Optional[Path] = None,
    environment: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppSettings:
    """
    Build AppSettings from all configuration layers.

    Args:
        config_dir: Directory holding the JSON settings files.
                    Defaults to the current working directory.
        environment: Environment name selecting appsettings.{name}.json.
                     Defaults to the SYNAPSE_ENVIRONMENT variable.
        overrides: Highest priority values, e.g. from command-line options.
        environ: Environment mapping to read (defaults to os.environ).

    Raises:
        FileNotFoundError: If appsettings.json is missing.
        pydantic.ValidationError: If the merged settings are invalid.
    """
    config_dir = Path(config_dir) if config_dir is not None else Path.cwd()
    environ = os.environ if environ is None else environ
    environment = environment or environ.get(ENVIRONMENT_VARIABLE) or None

    merged = _load_json(config_dir / BASE_SETTINGS_FILE, required=True)
    if environment:
        merged = merge_settings(merged, _load_json(config_dir / f"appsettings.{environment}.json"))
    merged = merge_settings(merged, _load_json(config_dir / LOCAL_SETTINGS_FILE))
    merged = merge_settings(merged, settings_from_environ(environ))
    if overrides:
        merged = merge_settings(merged, overrides)
    if environment:
        merged = merge_settings(merged, {"Environment": environment})

    return AppSettings.model_validate(merged)


# Module-level singleton for convenience
# In tests, call load_settings() directly with a temporary config_dir
_default_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get the default settings singleton, loading it on first use."""
    global _default_settings
    if _default_settings is None:
        _default_settings = load_settings()
    return _default_settings


def reset_settings(settings: Optional[AppSettings] = None) -> None:
    """Replace (or clear) the cached settings singleton."""
    global _default_settings
    _default_settings = settings
