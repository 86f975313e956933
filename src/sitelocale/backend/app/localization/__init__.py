"""Locale resolution, validation and message catalogue binding."""

from .context import FlaskSessionContext, InMemorySessionContext, LocaleHints, SessionContext
from .errors import InvalidArgument, SessionInactive
from .installed import InstalledLocaleProvider, StaticInstalledLocales, SystemInstalledLocales
from .resolver import LocaleResolver, guess_locale, parse_accept_language, validate_locale

__all__ = [
    "FlaskSessionContext",
    "InMemorySessionContext",
    "InstalledLocaleProvider",
    "InvalidArgument",
    "LocaleHints",
    "LocaleResolver",
    "SessionContext",
    "SessionInactive",
    "StaticInstalledLocales",
    "SystemInstalledLocales",
    "guess_locale",
    "parse_accept_language",
    "validate_locale",
]
