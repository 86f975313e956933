"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import locale  # noqa: E402

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from sitelocale.backend.app import create_app  # noqa: E402
from sitelocale.backend.app.localization import StaticInstalledLocales  # noqa: E402
from sitelocale.backend.config.schema import LocaleConfiguration, SiteSettings  # noqa: E402

DOMAIN = "deepdivedylan-mx"
SUPPORTED = ("en_US.UTF8", "es_MX.UTF8")


@pytest.fixture(autouse=True)
def _keep_process_locale(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stop catalogue binding from changing the test runner's C locale."""

    monkeypatch.setattr(locale, "setlocale", lambda category, value=None: "C")
    monkeypatch.setenv("LANG", "C")


@pytest.fixture()
def locale_settings() -> LocaleConfiguration:
    return LocaleConfiguration(default="en_US.UTF8", supported=SUPPORTED)


@pytest.fixture()
def site_settings(locale_settings: LocaleConfiguration) -> SiteSettings:
    return SiteSettings(domain=DOMAIN, locale=locale_settings)


@pytest.fixture()
def installed_locales() -> StaticInstalledLocales:
    return StaticInstalledLocales(["C", "C.utf8", "POSIX", "en_US.UTF8", "es_MX.UTF8"])


@pytest.fixture()
def app(
    monkeypatch: pytest.MonkeyPatch,
    site_settings: SiteSettings,
    installed_locales: StaticInstalledLocales,
) -> Flask:
    """Return a configured Flask application for integration tests."""

    monkeypatch.setenv("SITELOCALE_SECRET_KEY", "test-secret")
    application = create_app(site_settings, installed_locales)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
