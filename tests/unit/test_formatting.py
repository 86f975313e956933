"""Tests for the request-wide Babel formatting locale."""

from __future__ import annotations

import contextvars
from datetime import date

from sitelocale.backend.app.localization import formatting


def test_set_formatting_locale_parses_abbreviation() -> None:
    babel_locale = formatting.set_formatting_locale("es-MX")

    assert str(babel_locale) == "es_MX"
    assert formatting.get_formatting_locale() is babel_locale


def test_unknown_abbreviation_falls_back_to_english(caplog) -> None:
    babel_locale = formatting.set_formatting_locale("zz-ZZ")

    assert str(babel_locale) == formatting.FALLBACK_FORMATTING_LOCALE
    assert "Unknown formatting locale" in caplog.text


def test_formatting_uses_active_locale() -> None:
    formatting.set_formatting_locale("es-MX")
    assert formatting.format_date(date(2024, 3, 1)) == "1 de marzo de 2024"

    formatting.set_formatting_locale("en-US")
    assert formatting.format_date(date(2024, 3, 1)) == "March 1, 2024"
    assert formatting.format_decimal(1234.5) == "1,234.5"


def test_fresh_context_uses_fallback_locale() -> None:
    context = contextvars.Context()

    babel_locale = context.run(formatting.get_formatting_locale)

    assert str(babel_locale) == "en_US"
