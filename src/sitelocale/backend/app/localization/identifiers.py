"""Helpers for the ``ll_CC.UTF8`` locale identifiers used across the site."""

from __future__ import annotations

import re
from typing import Final

from .errors import InvalidArgument

LOCALE_PATTERN: Final = re.compile(r"^([a-z]{2})_([A-Z]{2})\.[Uu][Tt][Ff]8$")
_ALLOWED_CHARACTERS: Final = re.compile(r"^[A-Za-z0-9_.\-]*$")
_DOMAIN_FORBIDDEN: Final = re.compile(r"[\x00-\x1f\x7f/\\]")


def sanitize_locale(value: str) -> str:
    """Trim ``value`` and reject characters outside the locale allow-list."""

    candidate = value.strip()
    if not _ALLOWED_CHARACTERS.match(candidate):
        raise InvalidArgument("invalid locale")
    return candidate


def normalize_locale(value: str) -> str:
    """Return the sanitized locale, raising :class:`InvalidArgument` if malformed."""

    candidate = sanitize_locale(value)
    if LOCALE_PATTERN.match(candidate) is None:
        raise InvalidArgument("invalid locale")
    return candidate


def is_well_formed(value: str | None) -> bool:
    if not value:
        return False
    try:
        normalize_locale(value)
    except InvalidArgument:
        return False
    return True


def normalize_domain(value: str) -> str:
    """Trim a message catalogue domain and make sure it can name a catalogue file."""

    candidate = value.strip()
    if not candidate or _DOMAIN_FORBIDDEN.search(candidate):
        raise InvalidArgument("invalid domain")
    return candidate


def abbreviate(locale_code: str) -> str:
    """Return the ``ll-CC`` form used for ``lang`` attributes (``es_MX.UTF8`` -> ``es-MX``)."""

    prefix, separator, _ = locale_code.partition(".")
    if not separator or not prefix:
        raise InvalidArgument(f"locale {locale_code!r} has no encoding suffix")
    return prefix.replace("_", "-")


def language_code(tag: str) -> str:
    """Return the lower-cased leading language subtag of a locale or language tag."""

    return re.split(r"[-_.]", tag.strip(), maxsplit=1)[0].lower()


__all__ = [
    "LOCALE_PATTERN",
    "abbreviate",
    "is_well_formed",
    "language_code",
    "normalize_domain",
    "normalize_locale",
    "sanitize_locale",
]
