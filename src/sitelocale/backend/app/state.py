"""Per-application registry of the collaborators used during locale resolution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from flask import Flask, current_app, g

from sitelocale.backend.config.schema import SiteSettings

from .localization import InstalledLocaleProvider, LocaleResolver

EXTENSION_KEY = "sitelocale"


@dataclass(frozen=True)
class LocaleServices:
    settings: SiteSettings
    installed_locales: InstalledLocaleProvider
    localedir: Path


def init_locale_services(app: Flask, services: LocaleServices) -> None:
    app.extensions[EXTENSION_KEY] = services


def get_locale_services() -> LocaleServices:
    return current_app.extensions[EXTENSION_KEY]


def current_resolver() -> LocaleResolver:
    """Return the resolver built for the current request."""

    return g.locale_resolver


__all__ = [
    "LocaleServices",
    "current_resolver",
    "get_locale_services",
    "init_locale_services",
]
