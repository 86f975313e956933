"""Utilities for validating site settings against the host and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Sequence

from sitelocale.backend.app.localization.identifiers import is_well_formed
from sitelocale.backend.app.localization.installed import (
    InstalledLocaleProvider,
    SystemInstalledLocales,
)
from sitelocale.backend.app.localization.resolver import validate_locale

from .schema import LocaleConfiguration, SiteSettings
from .settings import load_settings_file, resolve_settings_path


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_syntax(config: LocaleConfiguration) -> list[str]:
    errors: list[str] = []

    for entry in config.supported:
        if not is_well_formed(entry):
            errors.append(
                _format_scope("locale.supported", f"'{entry}' is not of the form ll_CC.UTF8")
            )

    duplicates = [entry for entry, count in Counter(config.supported).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope("locale.supported", f"duplicate locales detected: {sorted(duplicates)}")
        )

    return errors


def _validate_installed(
    config: LocaleConfiguration, installed: InstalledLocaleProvider
) -> list[str]:
    if not installed.list_installed_locales():
        return [_format_scope("installed_locales", "no installed locales could be listed")]

    return [
        _format_scope(
            "locale",
            f"'{entry}' is not installed on this host"
            " (names must match `locale -a` output exactly, e.g. en_US.utf8)",
        )
        for entry in config.locales
        if not validate_locale(entry, installed)
    ]


def validate_site_settings(
    settings: SiteSettings,
    installed: InstalledLocaleProvider | None = None,
) -> list[str]:
    """Return human-readable issues for ``settings``.

    Installed-locale checks only run when ``installed`` is provided.
    """

    errors = _validate_syntax(settings.locale)
    if installed is not None:
        errors.extend(_validate_installed(settings.locale, installed))
    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the site locale settings and report issues."
    )
    parser.add_argument(
        "settings",
        nargs="?",
        type=Path,
        help="Settings file to validate (defaults to the active settings file)",
    )
    parser.add_argument(
        "--check-installed",
        action="store_true",
        help=(
            "Also verify that every configured locale is installed on this host. "
            "Names are compared exactly, so en_US.UTF8 does not match the "
            "en_US.utf8 that glibc prints."
        ),
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    path = args.settings or resolve_settings_path()

    try:
        settings = load_settings_file(path)
    except (FileNotFoundError, ValueError) as error:
        print(f"[{path.name}] failed to load settings: {error}")
        return 1

    installed: InstalledLocaleProvider | None = None
    if args.check_installed:
        options = settings.installed_locales
        installed = SystemInstalledLocales(
            options.command,
            timeout_seconds=options.timeout_seconds,
            refresh_seconds=None,
        )

    issues = validate_site_settings(settings, installed)
    if issues:
        print(f"[{path.name}] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"[{path.name}] OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
