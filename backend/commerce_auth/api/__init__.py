"""HTTP API: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from flask import Flask


def _join_prefix(*segments: str) -> str:
    return "/" + "/".join(s.strip("/") for s in segments if s.strip("/"))


def init_app(app: Flask) -> None:
    """Mount each v1 blueprint at ``<API_BASE_PREFIX>/v1/<relative prefix>``.

    An empty relative prefix mounts the blueprint at the version root
    (``/api/v1/health``).
    """

    from commerce_auth.api.v1 import API_VERSION, REGISTRY

    base = app.config.get("API_BASE_PREFIX", "/api")
    for bp, rel_prefix in REGISTRY:
        app.register_blueprint(bp, url_prefix=_join_prefix(base, API_VERSION, rel_prefix))


__all__ = ["init_app"]
