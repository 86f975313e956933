"""Integration tests for the rendered landing page."""

from __future__ import annotations

from pathlib import Path
from shutil import copytree

import pytest
from flask.testing import FlaskClient

from sitelocale.backend.app import create_app
from sitelocale.backend.app.localization import StaticInstalledLocales
from sitelocale.backend.app.localization.catalog import LOCALE_DIRECTORY, compile_catalogs
from sitelocale.backend.config.schema import SiteSettings


@pytest.fixture()
def translated_client(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    site_settings: SiteSettings,
    installed_locales: StaticInstalledLocales,
) -> FlaskClient:
    """Client whose catalogue directory holds freshly compiled repository catalogues."""

    localedir = tmp_path / "locale"
    copytree(LOCALE_DIRECTORY, localedir)
    compile_catalogs(localedir)

    monkeypatch.setenv("SITELOCALE_SECRET_KEY", "test-secret")
    app = create_app(site_settings, installed_locales, localedir=localedir)
    app.config.update(TESTING=True)
    return app.test_client()


def test_index_renders_default_language(client: FlaskClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["Content-Language"] == "en_US.UTF8"
    body = response.get_data(as_text=True)
    assert '<html lang="en-US">' in body
    assert "Welcome" in body


def test_index_renders_translated_page(translated_client: FlaskClient) -> None:
    response = translated_client.get("/", headers={"Accept-Language": "es-MX"})

    body = response.get_data(as_text=True)
    assert response.headers["Content-Language"] == "es_MX.UTF8"
    assert '<html lang="es-MX">' in body
    assert "Bienvenido" in body
    assert "Hoy es" in body


def test_switch_changes_rendered_language(translated_client: FlaskClient) -> None:
    assert "Welcome" in translated_client.get("/").get_data(as_text=True)

    translated_client.post("/api/v1/locale", json={"locale": "es_MX.UTF8"})

    body = translated_client.get("/").get_data(as_text=True)
    assert '<html lang="es-MX">' in body
    assert "Bienvenido" in body
