"""HTML pages rendered with the visitor's locale."""

from __future__ import annotations

from datetime import date

from flask import Blueprint, render_template

blueprint = Blueprint("pages", __name__)


@blueprint.get("/")
def index():
    """Render the landing page."""

    return render_template("index.html", today=date.today())
