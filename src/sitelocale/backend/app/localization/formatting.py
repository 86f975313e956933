"""Request-scoped default locale for Babel number and date formatting."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from datetime import date, datetime
from typing import Final

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

logger = logging.getLogger(__name__)

FALLBACK_FORMATTING_LOCALE: Final = "en_US"

# Each request (thread or task) sees its own default; unset contexts format
# with the fallback locale.
_formatting_locale: ContextVar[Locale | None] = ContextVar(
    "sitelocale_formatting_locale", default=None
)


def parse_formatting_locale(abbreviation: str) -> Locale:
    """Parse an ``ll-CC`` abbreviation, falling back to ``en_US`` for unknown codes."""

    try:
        return Locale.parse(abbreviation, sep="-")
    except (UnknownLocaleError, ValueError) as error:
        logger.warning(
            "Unknown formatting locale '%s': %s. Falling back to %s",
            abbreviation,
            error,
            FALLBACK_FORMATTING_LOCALE,
        )
        return Locale.parse(FALLBACK_FORMATTING_LOCALE)


def set_formatting_locale(abbreviation: str) -> Locale:
    babel_locale = parse_formatting_locale(abbreviation)
    _formatting_locale.set(babel_locale)
    return babel_locale


def get_formatting_locale() -> Locale:
    return _formatting_locale.get() or Locale.parse(FALLBACK_FORMATTING_LOCALE)


def format_decimal(number: float | int) -> str:
    return babel_numbers.format_decimal(number, locale=get_formatting_locale())


def format_date(value: date | datetime, format: str = "long") -> str:
    return babel_dates.format_date(value, format=format, locale=get_formatting_locale())


__all__ = [
    "FALLBACK_FORMATTING_LOCALE",
    "format_date",
    "format_decimal",
    "get_formatting_locale",
    "parse_formatting_locale",
    "set_formatting_locale",
]
