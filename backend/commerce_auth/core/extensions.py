"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from http import HTTPStatus

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

from commerce_auth.core.errors import jwt_problem

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None


@jwt.unauthorized_loader
def _missing_token(reason: str):
    return jwt_problem(HTTPStatus.UNAUTHORIZED, "unauthorized", reason)


@jwt.invalid_token_loader
def _invalid_token(reason: str):
    # Also covers refresh tokens presented where an access token is required
    return jwt_problem(HTTPStatus.UNAUTHORIZED, "invalid_token", reason)


@jwt.expired_token_loader
def _expired_token(jwt_header, jwt_payload):
    return jwt_problem(HTTPStatus.UNAUTHORIZED, "token_expired", "Token has expired")


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT verification and optional Redis.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`commerce_auth.models` package to ensure SQLAlchemy metadata is
        ready for migrations.

    Notes
    -----
    ``JWTManager`` only *verifies* bearer tokens on protected routes; its keys
    and algorithm are installed by :func:`commerce_auth.core.container.init_app`
    from the same key pair the token issuer uses.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from commerce_auth import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        return

    redis_client = redis.Redis.from_url(redis_url)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client


def get_redis() -> redis.Redis | None:
    """Return the initialized Redis client, or ``None`` when Redis is disabled."""
    return redis_client
