"""Application factory for the site backend."""

import os
import secrets
from pathlib import Path
from warnings import warn

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import BadRequest

from sitelocale.backend.config.schema import SiteSettings
from sitelocale.backend.config.settings import load_settings
from sitelocale.backend.version import get_project_version

from .http import problem_response
from .localization import (
    FlaskSessionContext,
    InstalledLocaleProvider,
    InvalidArgument,
    LocaleHints,
    LocaleResolver,
    SessionInactive,
    SystemInstalledLocales,
    guess_locale,
)
from .localization import catalog, formatting
from .state import LocaleServices, get_locale_services, init_locale_services
from .routes import register_routes

SECRET_KEY_ENV_VAR = "SITELOCALE_SECRET_KEY"


def _build_installed_locales(settings: SiteSettings) -> InstalledLocaleProvider:
    options = settings.installed_locales
    return SystemInstalledLocales(
        options.command,
        timeout_seconds=options.timeout_seconds,
        refresh_seconds=options.refresh_seconds,
    )


def _configure_secret_key(app: Flask) -> None:
    secret_key = os.getenv(SECRET_KEY_ENV_VAR)
    if secret_key and secret_key.strip():
        app.secret_key = secret_key.strip()
        return

    warn(
        f"{SECRET_KEY_ENV_VAR} is not set; sessions will not survive a restart.",
        stacklevel=1,
    )
    app.secret_key = secrets.token_hex(32)


def _configure_templates(app: Flask) -> None:
    app.jinja_env.add_extension("jinja2.ext.i18n")
    app.jinja_env.install_gettext_callables(
        catalog.gettext, catalog.ngettext, newstyle=True
    )
    app.jinja_env.filters["format_date"] = formatting.format_date
    app.jinja_env.filters["format_decimal"] = formatting.format_decimal


def create_app(
    settings: SiteSettings | None = None,
    installed_locales: InstalledLocaleProvider | None = None,
    localedir: Path | None = None,
) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)
    settings = settings or load_settings()

    _configure_secret_key(app)
    _configure_templates(app)
    init_locale_services(
        app,
        LocaleServices(
            settings=settings,
            installed_locales=installed_locales or _build_installed_locales(settings),
            localedir=localedir or catalog.LOCALE_DIRECTORY,
        ),
    )

    @app.before_request
    def _resolve_locale() -> None:
        services = get_locale_services()
        session = FlaskSessionContext()
        locale = guess_locale(session, LocaleHints.from_request(request), services.settings.locale)

        resolver = LocaleResolver(
            services.settings.domain,
            locale,
            session=session,
            supported=services.settings.locale,
        )
        resolver.setup_locale(services.localedir)
        g.locale_resolver = resolver

    @app.after_request
    def _send_content_language(response: Response) -> Response:
        resolver = g.get("locale_resolver")
        if resolver is not None:
            resolver.send_content_language_header(response)
        return response

    @app.context_processor
    def _inject_locale() -> dict[str, str]:
        resolver = g.get("locale_resolver")
        if resolver is None:
            return {}
        return {"lang": resolver.abbreviation, "locale": resolver.locale}

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        locales = get_locale_services().settings.locale
        payload = {
            "status": "ok",
            "version": get_project_version(),
            "default_locale": locales.default,
            "supported_locales": list(locales.locales),
        }
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(InvalidArgument)
    def handle_invalid_argument(error: InvalidArgument):
        """Reject explicit requests for unsupported or malformed locales."""

        return problem_response(
            "invalid_argument", status=400, message=str(error)
        ).to_response()

    @app.errorhandler(SessionInactive)
    def handle_session_inactive(error: SessionInactive):
        return problem_response(
            "session_inactive", status=500, message=str(error)
        ).to_response()

    return app
