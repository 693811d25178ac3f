from __future__ import annotations

import structlog
from flask import current_app, flash, redirect, render_template, url_for

from blogfolio.clients.categories import CategoryClient, CategoryClientError
from blogfolio.schemas.envelope import Envelope

from blogfolio.blueprints.site import bp

log = structlog.get_logger(__name__)

SAMPLE_CATEGORY_NAME = "New Category"
SAMPLE_CATEGORY_DESCRIPTION = "A freshly created category"

API_ENDPOINTS = [
    ("GET /api/categories", "List all categories"),
    ("GET /api/categories/<id>", "Fetch a single category"),
    ("POST /api/categories", "Create a category"),
    ("PUT /api/categories/<id>", "Update a category"),
    ("DELETE /api/categories/<id>", "Delete a category"),
]


def _client() -> CategoryClient:
    return current_app.extensions["category_client"]


def _flash_envelope(envelope: Envelope) -> None:
    flash(envelope.msg, "success" if envelope.ok else "error")


@bp.get("/api-demo")
def api_demo():
    """Category list rendered through the JSON API client"""
    categories = []
    try:
        envelope = _client().get_all()
    except CategoryClientError as e:
        log.error("api_demo_fetch_failed", error=str(e))
        flash(str(e), "error")
    else:
        if envelope.ok:
            categories = envelope.data or []
        else:
            _flash_envelope(envelope)

    return render_template(
        "api_demo.html",
        title="Categories API Demo",
        categories=categories,
        endpoints=API_ENDPOINTS,
    )


@bp.post("/api-demo/create")
def api_demo_create():
    try:
        _flash_envelope(_client().create(SAMPLE_CATEGORY_NAME, SAMPLE_CATEGORY_DESCRIPTION))
    except CategoryClientError as e:
        log.error("api_demo_create_failed", error=str(e))
        flash(str(e), "error")
    return redirect(url_for("site.api_demo"))


@bp.post("/api-demo/<string:category_id>/delete")
def api_demo_delete(category_id: str):
    try:
        _flash_envelope(_client().delete(category_id))
    except CategoryClientError as e:
        log.error("api_demo_delete_failed", category_id=category_id, error=str(e))
        flash(str(e), "error")
    return redirect(url_for("site.api_demo"))
