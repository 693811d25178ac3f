from __future__ import annotations

import json
import os
from typing import Any, Dict

import click
import structlog
from flask import Flask, jsonify, g, request
from flask_wtf.csrf import CSRFError

from blogfolio.clients.categories import CategoryClient
from blogfolio.config import Config
from blogfolio.extensions import db, csrf, limiter
from blogfolio.logging_config import configure_logging
from blogfolio.repositories import StoreError, build_category_store
from blogfolio.schemas.envelope import Envelope
from blogfolio.security import apply_security_headers
from blogfolio.utils.http_client import HTTPClient
from blogfolio.wallet.provider import RpcWalletProvider
import blogfolio.models  # noqa: F401  ensure models are registered with SQLAlchemy

log = structlog.get_logger(__name__)


def create_app(config_overrides: Dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=False)

    # Load config
    app.config.from_object(Config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # Process-scoped collaborators, built once and handed to handlers by reference
    app.extensions["category_store"] = build_category_store(app)
    app.extensions["wallet_provider"] = RpcWalletProvider(
        app.config["WALLET_RPC_URL"],
        timeout=float(app.config.get("WALLET_RPC_TIMEOUT", 10)),
    )
    app.extensions["category_client"] = CategoryClient(HTTPClient(
        base_url=app.config.get("HTTP_CLIENT_BASE_URL"),
        timeout=float(app.config.get("HTTP_CLIENT_TIMEOUT", 10)),
        allowed_domains=app.config.get("HTTP_CLIENT_ALLOWED_DOMAINS"),
    ))

    # Request context enrichment for logging and CSP nonces
    @app.before_request
    def add_request_context() -> None:
        g.request_id = request.headers.get("X-Request-ID") or os.urandom(8).hex()
        g.script_nonce = os.urandom(16).hex()

    @app.context_processor
    def template_context() -> dict:
        return {"script_nonce": getattr(g, "script_nonce", "")}

    # Security headers
    @app.after_request
    def set_headers(resp):
        return apply_security_headers(resp)

    # Blueprints
    from blogfolio.blueprints.api.categories import bp as categories_api_bp
    from blogfolio.blueprints.site import bp as site_bp

    csrf.exempt(categories_api_bp)
    app.register_blueprint(categories_api_bp)
    app.register_blueprint(site_bp)

    # Health route
    @app.get("/health")
    def health():
        try:
            app.extensions["category_store"].list_all()
            store_ok = "connected"
        except StoreError as e:
            log.warning("health_store_check_failed", error=e.message)
            store_ok = "error"
        return jsonify({"status": "ok", "store": store_ok}), 200

    # Error handlers answer /api/ paths with the category API envelope;
    # site pages keep Flask's default error pages
    def envelope_error(e, code: int, error_code: str, msg: str):
        if not request.path.startswith("/api/"):
            return e
        return jsonify(Envelope.failure(code, error_code, msg).to_json()), code

    @app.errorhandler(CSRFError)
    def csrf_error(e):
        return envelope_error(e, 400, "csrf_failed", e.description)

    @app.errorhandler(400)
    def bad_request(e):
        return envelope_error(e, 400, "bad_request", str(e))

    @app.errorhandler(404)
    def not_found(e):
        return envelope_error(e, 404, "not_found", "resource not found")

    @app.errorhandler(405)
    def method_not_allowed(e):
        return envelope_error(e, 405, "method_not_allowed", "method not allowed")

    @app.errorhandler(429)
    def rate_limited(e):
        return envelope_error(e, 429, "rate_limited", "too many requests")

    @app.errorhandler(500)
    def server_error(e):
        original = getattr(e, "original_exception", None)
        log.error("unhandled_server_error", path=request.path, error=str(original or e))
        return envelope_error(e, 500, "server_error", str(original) if original else "internal server error")

    # CLI: create tables for the SQL store (development convenience)
    @app.cli.command("init-db")
    def init_db() -> None:
        db.create_all()
        click.echo("Database tables created")

    # CLI: create a category through the same handler the API uses
    @app.cli.command("create-category")
    @click.option("--name", prompt=True)
    @click.option("--description", default=None)
    def create_category_command(name: str, description: str | None) -> None:
        from blogfolio.services.categories import ApiRequest, create_category

        api_request = ApiRequest(
            method="POST",
            body=json.dumps({"name": name, "description": description}),
        )
        api_response = create_category(app.extensions["category_store"], api_request)
        click.echo(json.dumps(api_response.envelope.to_json(), ensure_ascii=False))
        if not api_response.envelope.ok:
            raise SystemExit(1)

    return app
