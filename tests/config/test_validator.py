from __future__ import annotations

import json
from pathlib import Path

import pytest

from sitelocale.backend.app.localization import StaticInstalledLocales
from sitelocale.backend.config import validator
from sitelocale.backend.config.schema import LocaleConfiguration, SiteSettings
from sitelocale.backend.config.settings import DEFAULT_SETTINGS_FILE, load_settings_file
from sitelocale.backend.config.validator import validate_site_settings


def _settings(default: str, *supported: str) -> SiteSettings:
    return SiteSettings(
        domain="demo", locale=LocaleConfiguration(default=default, supported=supported)
    )


def test_bundled_settings_are_valid() -> None:
    settings = load_settings_file(DEFAULT_SETTINGS_FILE)

    assert validate_site_settings(settings) == []


def test_validator_flags_malformed_locales() -> None:
    errors = validate_site_settings(_settings("en_US.UTF8", "es_MX.UTF8", "es-MX"))

    assert len(errors) == 1
    assert any(error.startswith("locale.supported") and "es-MX" in error for error in errors)


def test_validator_flags_duplicates() -> None:
    errors = validate_site_settings(_settings("en_US.UTF8", "es_MX.UTF8", "es_MX.UTF8"))

    assert any("duplicate" in error for error in errors)


def test_validator_reports_uninstalled_locales() -> None:
    installed = StaticInstalledLocales(["en_US.UTF8"])

    errors = validate_site_settings(_settings("en_US.UTF8", "es_MX.UTF8"), installed)

    assert len(errors) == 1
    assert errors[0].startswith("locale: 'es_MX.UTF8' is not installed on this host")


def test_uninstalled_report_explains_exact_matching() -> None:
    installed = StaticInstalledLocales(["en_US.utf8", "es_MX.utf8"])

    errors = validate_site_settings(_settings("en_US.UTF8"), installed)

    assert len(errors) == 1
    assert "match `locale -a` output exactly" in errors[0]
    assert "en_US.utf8" in errors[0]


def test_help_mentions_exact_installed_matching(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        validator.main(["--help"])

    help_text = " ".join(capsys.readouterr().out.split())
    assert "compared exactly" in help_text
    assert "en_US.utf8" in help_text


def test_validator_reports_unlistable_installed_locales() -> None:
    errors = validate_site_settings(_settings("en_US.UTF8"), StaticInstalledLocales([]))

    assert errors == ["installed_locales: no installed locales could be listed"]


def test_main_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert validator.main([str(DEFAULT_SETTINGS_FILE)]) == 0
    assert "OK" in capsys.readouterr().out


def test_main_reports_issues(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "site.json"
    path.write_text(
        json.dumps({"domain": "demo", "locale": {"default": "en_US.UTF8", "supported": ["es-MX"]}}),
        encoding="utf-8",
    )

    assert validator.main([str(path)]) == 1
    assert "1 issue(s) detected" in capsys.readouterr().out


def test_main_reports_unreadable_settings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert validator.main([str(tmp_path / "missing.json")]) == 1
    assert "failed to load settings" in capsys.readouterr().out


def test_main_rejects_malformed_default(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "site.json"
    path.write_text(
        json.dumps({"domain": "demo", "locale": {"default": "english"}}),
        encoding="utf-8",
    )

    assert validator.main([str(path)]) == 1
    assert "failed to load settings" in capsys.readouterr().out
