from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env if present
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class Config:
    SECRET_KEY: str = os.getenv("SECRET_KEY", os.urandom(32).hex())

    SITE_NAME = os.getenv("SITE_NAME", "Blogfolio")

    # Database (SQL category store backend)
    SQLALCHEMY_DATABASE_URI: str = os.getenv("DATABASE_URL", "sqlite:///blogfolio.db")
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Category store: "sql" uses SQLALCHEMY_DATABASE_URI, "rest" talks to a
    # PostgREST-compatible hosted backend
    CATEGORY_STORE_BACKEND: str = os.getenv("CATEGORY_STORE_BACKEND", "sql")
    STORE_URL: str | None = os.getenv("STORE_URL")
    # Read from environment and then unset so it never leaks to subprocesses
    STORE_API_KEY: str | None = os.environ.pop("STORE_API_KEY", None)
    STORE_TIMEOUT: float = float(os.getenv("STORE_TIMEOUT", "10"))

    # Client used by the demo page to call our own API
    HTTP_CLIENT_BASE_URL: str = os.getenv("HTTP_CLIENT_BASE_URL", "http://localhost:8000")
    HTTP_CLIENT_TIMEOUT: float = float(os.getenv("HTTP_CLIENT_TIMEOUT", "10"))
    HTTP_CLIENT_ALLOWED_DOMAINS: list[str] = [
        d.strip() for d in os.getenv("HTTP_CLIENT_ALLOWED_DOMAINS", "").split(",") if d.strip()
    ]

    # Wallet page (read-only JSON-RPC lookups)
    WALLET_RPC_URL: str = os.getenv("WALLET_RPC_URL", "https://ethereum-rpc.publicnode.com")
    WALLET_RPC_TIMEOUT: float = float(os.getenv("WALLET_RPC_TIMEOUT", "10"))

    # Rate limiting
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "100 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    CATEGORY_API_RATE_LIMIT = os.getenv("CATEGORY_API_RATE_LIMIT", "120 per minute")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Security headers
    # Use {nonce} placeholder for per-request nonce substitution in blogfolio.security.apply_security_headers
    SECURITY_CSP = (
        "default-src 'self'; "
        "script-src 'nonce-{nonce}' 'strict-dynamic' ;"
        "style-src 'self'; "
        "img-src 'self' data:; "
        "font-src 'self'; "
        "object-src 'none'; "
        "base-uri 'self'; "
        "frame-ancestors 'none'"
    )
    SECURITY_HSTS_SECONDS = 31536000

    SECURITY_PERMISSIONS_POLICY = (
        "geolocation=(), microphone=(), camera=(), payment=(), usb=(), "
        "magnetometer=(), gyroscope=(), accelerometer=(), "
        "autoplay=(), midi=(), sync-xhr=()"
    )

    # Flask env
    ENV = os.getenv("FLASK_ENV", "production")
    DEBUG = ENV != "production"
