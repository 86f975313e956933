"""Locale resolution for incoming requests.

Two locale lists are involved and they are kept apart on purpose:

* the *supported* locales come from the site settings and decide what a
  visitor may select (:func:`guess_locale`, :meth:`LocaleResolver.switch_locale`);
* the *installed* locales come from the host and are only consulted by
  :func:`validate_locale` for diagnostics and settings validation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from werkzeug.datastructures import LanguageAccept
from werkzeug.http import parse_accept_header
from werkzeug.wrappers import Response

from sitelocale.backend.config.schema import LocaleConfiguration

from .catalog import LOCALE_DIRECTORY, bind_catalog
from .context import SESSION_LOCALE_KEY, LocaleHints, SessionContext
from .errors import InvalidArgument, SessionInactive
from .formatting import set_formatting_locale
from .identifiers import abbreviate, language_code, normalize_domain, normalize_locale
from .installed import InstalledLocaleProvider

logger = logging.getLogger(__name__)


class LocaleResolver:
    """Request-scoped holder of the catalogue domain and the active locale."""

    def __init__(
        self,
        domain: str,
        locale: str,
        *,
        session: SessionContext,
        supported: LocaleConfiguration,
    ) -> None:
        self._session = session
        self._supported = supported
        self._domain = normalize_domain(domain)
        self._locale = ""
        self.set_locale(locale)

    def __repr__(self) -> str:
        return f"LocaleResolver(domain={self._domain!r}, locale={self._locale!r})"

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def abbreviation(self) -> str:
        """Short ``ll-CC`` form for the HTML ``lang`` attribute."""

        return abbreviate(self._locale)

    def set_locale(self, new_locale: str) -> None:
        """Commit ``new_locale`` after a syntax check and persist it in the session.

        No supported-locale check happens here; see :meth:`switch_locale`.
        """

        if not self._session.active:
            raise SessionInactive("session inactive")

        normalized = normalize_locale(new_locale)
        abbreviation = abbreviate(normalized)

        self._session.set(SESSION_LOCALE_KEY, normalized)
        self._locale = normalized
        set_formatting_locale(abbreviation)

    def switch_locale(self, new_locale: str) -> None:
        """Change to ``new_locale`` if the site supports it."""

        if not self._supported.is_supported(new_locale.strip()):
            raise InvalidArgument("invalid locale")

        self.set_locale(new_locale)
        logger.debug("Switched locale to %s", self._locale)

    def setup_locale(self, localedir: Path | None = None) -> None:
        """Bind the message catalogue for the current domain and locale."""

        bind_catalog(self._domain, self._locale, localedir or LOCALE_DIRECTORY)

    def send_content_language_header(self, response: Response) -> Response:
        response.headers["Content-Language"] = self._locale
        return response


def parse_accept_language(value: str | None) -> list[str]:
    """Return the acceptable language tags of an ``Accept-Language`` header, most preferred first.

    Wildcards and tags weighted ``q=0`` are dropped.
    """

    if not value:
        return []
    accepted = parse_accept_header(value, LanguageAccept)
    return [tag for tag, quality in accepted if tag and tag != "*" and quality > 0]


def _match_language(tags: list[str], supported: tuple[str, ...]) -> str | None:
    for tag in tags:
        wanted = language_code(tag)
        for candidate in supported:
            if language_code(candidate) == wanted:
                return candidate
    return None


def _acceptable(value: str | None, settings: LocaleConfiguration) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        normalized = normalize_locale(value)
    except InvalidArgument:
        return None
    return normalized if settings.is_supported(normalized) else None


def _candidates(session: SessionContext, hints: LocaleHints) -> Iterator[tuple[str, str | None]]:
    yield "session", session.get(SESSION_LOCALE_KEY)
    yield "cookie", hints.cookie
    yield "query", hints.query


def guess_locale(
    session: SessionContext,
    hints: LocaleHints,
    settings: LocaleConfiguration,
) -> str:
    """Pick the best supported locale for a request.

    Sources are consulted in order (session, cookie, query parameter,
    ``Accept-Language``) and the first one naming a well-formed supported
    locale wins. Anything else falls back to the configured default.
    """

    if not session.active:
        raise SessionInactive("session inactive")

    for source, value in _candidates(session, hints):
        accepted = _acceptable(value, settings)
        if accepted is not None:
            logger.debug("Resolved locale %s from %s", accepted, source)
            return accepted
        if value:
            logger.debug("Ignoring unsupported %s locale %r", source, value)

    matched = _match_language(parse_accept_language(hints.accept_language), settings.locales)
    accepted = _acceptable(matched, settings)
    if accepted is not None:
        logger.debug("Resolved locale %s from Accept-Language", accepted)
        return accepted

    return settings.default


def validate_locale(candidate: str, installed: InstalledLocaleProvider) -> bool:
    """Return whether ``candidate`` is exactly one of the host's installed locales."""

    return candidate in installed.list_installed_locales()


__all__ = [
    "LocaleResolver",
    "guess_locale",
    "parse_accept_language",
    "validate_locale",
]
