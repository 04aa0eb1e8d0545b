"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Load .env during development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_PRIVATE_KEY_PATH: str
        PEM file (PKCS#8) holding the RSA key used to sign tokens.
    JWT_PUBLIC_KEY_PATH: str
        PEM file (SubjectPublicKeyInfo) holding the RSA verification key.
    JWT_ALGORITHM: str
        Asymmetric signature algorithm shared by issuer and validators.
    JWT_ISSUER: str
        Value of the ``iss`` claim stamped on and required from every token.
    ACCESS_TOKEN_TTL_SECONDS: int
        Access token lifetime (one hour by default).
    REFRESH_TOKEN_TTL_SECONDS: int
        Refresh token lifetime (seven days by default).
    LOGIN_RATE_LIMIT_MAX_ATTEMPTS: int
        Login attempts admitted per client inside one window.
    LOGIN_RATE_LIMIT_WINDOW_MINUTES: int
        Length of the login rate-limit window.
    REFRESH_RATE_LIMIT_MAX_ATTEMPTS: int
        Refresh calls admitted per client inside one window.
    REFRESH_RATE_LIMIT_WINDOW_MINUTES: int
        Length of the refresh rate-limit window.
    RATE_LIMIT_SWEEP_INTERVAL_SECONDS: int
        Minimum delay between two passive purges of expired counters.
    PASSWORD_HASH_METHOD: str | None
        Werkzeug hashing method for new password hashes.
    REDIS_URL: str | None
        Optional Redis backend for the refresh-token denylist.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    USE_PROXYFIX: bool
        Trust the single ``X-Forwarded-*`` hop appended by a reverse proxy.
        Disable when the app is exposed directly to clients.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"

    # Secrets / keys
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_PRIVATE_KEY_PATH = os.getenv("JWT_PRIVATE_KEY_PATH", "keys/privateKey.pem")
    JWT_PUBLIC_KEY_PATH = os.getenv("JWT_PUBLIC_KEY_PATH", "keys/publicKey.pem")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "RS256")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "https://commerce.local/auth")

    # Token lifetimes
    ACCESS_TOKEN_TTL_SECONDS = env_int("ACCESS_TOKEN_TTL_SECONDS", 3600)
    REFRESH_TOKEN_TTL_SECONDS = env_int("REFRESH_TOKEN_TTL_SECONDS", 604800)

    # Rate limiting (single process, in-memory)
    LOGIN_RATE_LIMIT_MAX_ATTEMPTS = env_int("LOGIN_RATE_LIMIT_MAX_ATTEMPTS", 5)
    LOGIN_RATE_LIMIT_WINDOW_MINUTES = env_int("LOGIN_RATE_LIMIT_WINDOW_MINUTES", 15)
    REFRESH_RATE_LIMIT_MAX_ATTEMPTS = env_int("REFRESH_RATE_LIMIT_MAX_ATTEMPTS", 30)
    REFRESH_RATE_LIMIT_WINDOW_MINUTES = env_int("REFRESH_RATE_LIMIT_WINDOW_MINUTES", 1)
    RATE_LIMIT_SWEEP_INTERVAL_SECONDS = env_int("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", 60)

    # Password hashing (Werkzeug method string; None keeps Werkzeug default)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD") or None

    # Denylist backend
    REDIS_URL = os.getenv("REDIS_URL") or None

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Reverse proxy (one trusted hop)
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Propagates exceptions so pytest can surface tracebacks directly.
    - Never talks to Redis; the in-memory denylist is used instead.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    PROPAGATE_EXCEPTIONS = True
    REDIS_URL = None
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
