"""Pytest fixtures: generated key pair, per-test application and database.

Every test that needs the application gets a fresh one (fresh in-memory
SQLite database, fresh rate-limit counters, fresh denylist) driven by a
manually advanced clock.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest
from commerce_auth.core.config import TestingConfig
from commerce_auth.core.container import get_components
from commerce_auth.core.extensions import db as _db
from commerce_auth.factory import create_app
from commerce_auth.infra.keys import generate_key_pair

from tests.helpers.clock import ManualClock


@pytest.fixture(scope="session")
def key_paths(tmp_path_factory):
    """Generate one RSA key pair for the whole test session.

    Returns
    -------
    tuple[pathlib.Path, pathlib.Path]
        ``(private_key_path, public_key_path)``.
    """
    directory = tmp_path_factory.mktemp("keys")
    private_key, public_key = directory / "privateKey.pem", directory / "publicKey.pem"
    generate_key_pair(private_key, public_key)
    return private_key, public_key


@pytest.fixture()
def clock() -> ManualClock:
    """Clock starting at the current second, advanced explicitly by tests."""
    return ManualClock(datetime.now(UTC).replace(microsecond=0))


@pytest.fixture()
def config(key_paths):
    """Testing configuration pointing at the session key pair."""
    private_key, public_key = key_paths

    class TestConfig(TestingConfig):
        JWT_PRIVATE_KEY_PATH = str(private_key)
        JWT_PUBLIC_KEY_PATH = str(public_key)
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        LOG_LEVEL = "WARNING"

    return TestConfig


@pytest.fixture()
def app(config, clock):
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    application = create_app(config, clock=clock, instance_relative_config=False)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture()
def db(app):
    """Create the schema inside an application context for one test."""
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Expose the scoped session and wire it into Factory Boy."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(db.session)
    yield db.session
    SQLAlchemySession.set(None)


@pytest.fixture()
def client(app, db):
    """Return a Flask test client sharing the test's application context."""
    return app.test_client()


@pytest.fixture()
def components(app, db):
    """Application-scoped auth components (limiter, issuer, validator...)."""
    return get_components()
