"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from commerce_auth.core.config import BaseConfig, get_config
from commerce_auth.core.logger import configure_logging
from commerce_auth.core.logger import init_app as init_logging
from commerce_auth.services._shared.ports.clock import Clock


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    clock: Clock | None = None,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object or import path; defaults to the class
        selected by ``APP_ENV``.
    :param clock: Time source for the auth core (tests inject a fake one).
    :raises KeyMaterialError: When the signing/verification keys cannot be
        loaded; the application is never returned half-wired.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from commerce_auth.core import proxy

    proxy.init_app(app)

    from commerce_auth.core import extensions

    extensions.init_app(app)

    init_logging(app)

    # fail fast on missing key material
    from commerce_auth.core import container

    container.init_app(app, clock=clock)

    from commerce_auth.core import cors

    cors.init_app(app)

    from commerce_auth.api import init_app as init_api

    init_api(app)

    from commerce_auth.core import errors

    errors.init_app(app)

    from commerce_auth import cli as app_cli

    app_cli.init_app(app)

    return app
