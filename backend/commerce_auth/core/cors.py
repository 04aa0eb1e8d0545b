"""Cross-origin access to the auth endpoints."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

# Tokens travel in JSON bodies and the Authorization header, never in cookies
ALLOWED_HEADERS = ["Authorization", "Content-Type", "X-Request-ID"]
EXPOSED_HEADERS = ["Retry-After", "X-Request-ID"]


def parse_origins(raw: str | None) -> list[str] | str:
    """Split ``CORS_ORIGINS``; blank or ``"*"`` means any origin."""
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if not origins or "*" in origins:
        return "*"
    return origins


def init_app(app: Flask) -> None:
    """Enable CORS on ``/api/*`` for the origins listed in ``CORS_ORIGINS``.

    Browsers may read ``Retry-After`` on 429 responses so login forms can show
    the remaining lockout time.
    """
    CORS(
        app,
        resources={r"/api/*": {"origins": parse_origins(app.config.get("CORS_ORIGINS"))}},
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=ALLOWED_HEADERS,
        expose_headers=EXPOSED_HEADERS,
        supports_credentials=False,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
