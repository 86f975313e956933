"""Settings loader wrapping the shared schema models."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    ConfigurationError,
    InstalledLocalesConfiguration,
    LocaleConfiguration,
    SiteSettings,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
DEFAULT_SETTINGS_FILE = CONFIG_DIRECTORY / "settings.json"
SETTINGS_ENV_VAR = "SITELOCALE_SETTINGS"


def resolve_settings_path() -> Path:
    """Return the settings file selected by the environment, or the bundled default."""

    override = os.getenv(SETTINGS_ENV_VAR)
    if override and override.strip():
        return Path(override.strip()).expanduser()
    return DEFAULT_SETTINGS_FILE


def _read_payload(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(handle) or {}
        else:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as error:
                raise ConfigurationError(f"Settings file {path.name} is not valid JSON: {error}") from error
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must define a mapping at the top level")
    return data


def load_settings_file(path: Path) -> SiteSettings:
    """Load and validate the settings stored at ``path``."""

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    raw_settings = _read_payload(path)

    try:
        return SiteSettings.model_validate(raw_settings)
    except ValidationError as error:
        raise ConfigurationError(f"Settings validation failed for {path.name}: {error}") from error


@lru_cache(maxsize=1)
def load_settings() -> SiteSettings:
    """Load and cache the active site settings."""

    return load_settings_file(resolve_settings_path())


__all__ = [
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "DEFAULT_SETTINGS_FILE",
    "InstalledLocalesConfiguration",
    "LocaleConfiguration",
    "SETTINGS_ENV_VAR",
    "SiteSettings",
    "load_settings",
    "load_settings_file",
    "resolve_settings_path",
]
