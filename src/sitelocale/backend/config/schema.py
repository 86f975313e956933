"""Pydantic models describing the site settings file."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when the settings file violates schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


def _strip_entry(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class LocaleConfiguration(ImmutableModel):
    """Locales the application is willing to serve.

    The default is the fallback for every request, so it must be well-formed.
    Supported entries are only checked for being non-empty strings; syntax
    problems there surface when a resolver tries to commit the entry, and are
    reported ahead of time by :mod:`sitelocale.backend.config.validator`.
    """

    default: str
    supported: tuple[str, ...] = ()

    @field_validator("default", mode="before")
    @classmethod
    def _normalise_default(cls, value: Any) -> Any:
        return _strip_entry(value)

    @field_validator("supported", mode="before")
    @classmethod
    def _normalise_supported(cls, value: Any) -> Any:
        if isinstance(value, str):
            raise ConfigurationError("Supported locales must be a list")
        if isinstance(value, (list, tuple)):
            return tuple(_strip_entry(entry) for entry in value)
        return value

    @model_validator(mode="after")
    def _validate_entries(self) -> Self:
        # Imported here: the application package imports this module at load time.
        from sitelocale.backend.app.localization.identifiers import is_well_formed

        if not self.default:
            raise ConfigurationError("A default locale is required")
        if not is_well_formed(self.default):
            raise ConfigurationError(
                f"Default locale '{self.default}' is not of the form ll_CC.UTF8"
            )
        if any(not entry for entry in self.supported):
            raise ConfigurationError("Supported locales must be non-empty strings")
        return self

    @property
    def locales(self) -> tuple[str, ...]:
        """Default locale followed by the supported list, without duplicates."""

        return tuple(dict.fromkeys((self.default, *self.supported)))

    def is_supported(self, candidate: str) -> bool:
        return candidate in self.locales


class InstalledLocalesConfiguration(ImmutableModel):
    """How to enumerate the locales installed on the host."""

    command: tuple[str, ...] = ("locale", "-a")
    timeout_seconds: float = Field(default=2.0, gt=0)
    refresh_seconds: float | None = Field(default=3600.0)

    @model_validator(mode="after")
    def _validate_values(self) -> Self:
        if not self.command:
            raise ConfigurationError("The installed locale command cannot be empty")
        if self.refresh_seconds is not None and self.refresh_seconds <= 0:
            raise ConfigurationError("Refresh intervals must be positive when provided")
        return self


class SiteSettings(ImmutableModel):
    """Top-level settings for the site."""

    domain: str
    locale: LocaleConfiguration
    installed_locales: InstalledLocalesConfiguration = Field(
        default_factory=InstalledLocalesConfiguration
    )

    @field_validator("domain", mode="before")
    @classmethod
    def _normalise_domain(cls, value: Any) -> Any:
        value = _strip_entry(value)
        if value == "":
            raise ConfigurationError("The message catalogue domain cannot be empty")
        return value


__all__ = [
    "ConfigurationError",
    "ImmutableModel",
    "InstalledLocalesConfiguration",
    "LocaleConfiguration",
    "SiteSettings",
]
