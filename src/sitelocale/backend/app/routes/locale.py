"""Endpoints for reading and switching the visitor's locale."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from sitelocale.backend.app.localization import validate_locale
from sitelocale.backend.app.localization.context import COOKIE_LOCALE_KEY
from sitelocale.backend.app.state import current_resolver, get_locale_services

blueprint = Blueprint("locale", __name__, url_prefix="/api/v1/locale")

COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def _locale_payload() -> dict[str, Any]:
    resolver = current_resolver()
    services = get_locale_services()
    locales = services.settings.locale

    return {
        "locale": resolver.locale,
        "abbreviation": resolver.abbreviation,
        "domain": resolver.domain,
        "default": locales.default,
        "supported": list(locales.locales),
        "installed": validate_locale(resolver.locale, services.installed_locales),
    }


def _requested_locale() -> str:
    data = request.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    locale = data.get("locale")
    if not isinstance(locale, str) or not locale.strip():
        raise BadRequest("A 'locale' string is required")
    return locale


@blueprint.get("")
def get_locale():
    """Return the locale resolved for this request."""

    return jsonify(_locale_payload()), 200


@blueprint.post("")
def switch_locale():
    """Switch to a supported locale and remember it for later visits."""

    resolver = current_resolver()
    resolver.switch_locale(_requested_locale())
    resolver.setup_locale(get_locale_services().localedir)

    response = jsonify(_locale_payload())
    response.set_cookie(
        COOKIE_LOCALE_KEY,
        resolver.locale,
        max_age=COOKIE_MAX_AGE,
        samesite="Lax",
        httponly=True,
    )
    return response, 200
