"""WSGI entrypoint for deploying the site on cPanel."""

from sitelocale.backend.app import create_app

# cPanel's Passenger expects a module-level variable named ``application``.
application = create_app()
