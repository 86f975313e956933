"""gettext catalogue binding and compilation.

Catalogues live under ``<repository root>/locale/<ll_CC>/LC_MESSAGES/<domain>.mo``
and are compiled from the ``.po`` sources next to them with Babel. Lookups go
through the translations activated for the current request context, so
templates and Python code share a single ``gettext`` entry point.
"""

from __future__ import annotations

import gettext as gettext_module
import locale
import logging
import os
from contextvars import ContextVar
from pathlib import Path

from babel.messages.mofile import write_mo
from babel.messages.pofile import read_po

logger = logging.getLogger(__name__)

LOCALE_DIRECTORY = Path(__file__).resolve().parents[5] / "locale"
CATALOGUE_CHARSET = "UTF-8"

_active_translations: ContextVar[gettext_module.NullTranslations | None] = ContextVar(
    "sitelocale_translations", default=None
)


def _apply_process_locale(locale_code: str) -> None:
    os.environ["LANG"] = locale_code
    try:
        locale.setlocale(locale.LC_ALL, locale_code)
    except locale.Error as error:
        logger.warning("Locale %s is not installed on this host: %s", locale_code, error)


def load_translations(
    domain: str, locale_code: str, localedir: Path = LOCALE_DIRECTORY
) -> gettext_module.NullTranslations:
    """Return the translations for ``domain`` in ``locale_code``, or a pass-through."""

    translations = gettext_module.translation(
        domain,
        localedir=str(localedir),
        languages=[locale_code],
        fallback=True,
    )
    if type(translations) is gettext_module.NullTranslations:
        logger.debug("No %s catalogue for %s under %s", domain, locale_code, localedir)
    return translations


def bind_catalog(
    domain: str, locale_code: str, localedir: Path = LOCALE_DIRECTORY
) -> gettext_module.NullTranslations:
    """Bind ``domain`` to ``localedir`` for ``locale_code`` and activate it."""

    _apply_process_locale(locale_code)
    gettext_module.bindtextdomain(domain, str(localedir))
    gettext_module.textdomain(domain)

    translations = load_translations(domain, locale_code, localedir)
    _active_translations.set(translations)
    return translations


def active_translations() -> gettext_module.NullTranslations:
    return _active_translations.get() or gettext_module.NullTranslations()


def gettext(message: str) -> str:
    return active_translations().gettext(message)


def ngettext(singular: str, plural: str, n: int) -> str:
    return active_translations().ngettext(singular, plural, n)


def compile_catalogs(localedir: Path = LOCALE_DIRECTORY) -> list[Path]:
    """Compile every ``.po`` file under ``localedir`` into a sibling ``.mo`` file."""

    compiled: list[Path] = []
    for source in sorted(localedir.glob("*/LC_MESSAGES/*.po")):
        with source.open("rb") as handle:
            catalog = read_po(handle, locale=source.parents[1].name, charset=CATALOGUE_CHARSET)

        target = source.with_suffix(".mo")
        with target.open("wb") as handle:
            write_mo(handle, catalog)
        logger.info("Compiled %s", target)
        compiled.append(target)

    return compiled


__all__ = [
    "CATALOGUE_CHARSET",
    "LOCALE_DIRECTORY",
    "active_translations",
    "bind_catalog",
    "compile_catalogs",
    "gettext",
    "load_translations",
    "ngettext",
]
