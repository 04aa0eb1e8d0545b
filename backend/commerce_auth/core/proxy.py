"""Proxy awareness: WSGI ``ProxyFix`` and client-address resolution."""

from __future__ import annotations

from collections.abc import Callable

from flask import Flask, has_request_context, request
from werkzeug.middleware.proxy_fix import ProxyFix

UNKNOWN_CLIENT = "unknown"


def init_app(app: Flask) -> None:
    """Apply :class:`werkzeug.middleware.proxy_fix.ProxyFix` when enabled.

    Parameters
    ----------
    app: flask.Flask
        Application whose WSGI pipeline should respect upstream proxy headers.

    Notes
    -----
    Controlled by the ``USE_PROXYFIX`` configuration flag (defaults to
    ``True``). ``ProxyFix`` trusts a single hop for ``X-Forwarded-*`` headers.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)


def client_ip() -> str:
    """Address of the calling client as resolved by the WSGI stack.

    ``X-Forwarded-For`` is never read here: the client controls every hop it
    sends. With ``USE_PROXYFIX`` enabled, :class:`ProxyFix` has already
    replaced ``REMOTE_ADDR`` with the hop appended by the trusted proxy.
    Outside a request, or when the address is unknown, returns
    ``"unknown"``.
    """
    if not has_request_context():
        return UNKNOWN_CLIENT
    return request.remote_addr or UNKNOWN_CLIENT


def endpoint_key(scope: str) -> Callable[[], str]:
    """Return a key function producing ``"<scope>:<client-ip>"`` for the current request."""
    return lambda: f"{scope}:{client_ip()}"
