"""Composition root for the authentication core.

Builds the long-lived collaborators once per application (key pair, token
issuer/validator, rate limiter, revocation store) and hands out a fresh
:class:`AuthService` per request, bound to the request's database session.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta

from flask import Flask, current_app

from commerce_auth.core.extensions import get_redis
from commerce_auth.core.logger import log_event
from commerce_auth.core.proxy import client_ip, endpoint_key
from commerce_auth.infra.keys import PemKeyStore
from commerce_auth.infra.redis import RedisTokenDenylistStore
from commerce_auth.infra.security import WerkzeugPasswordHasher
from commerce_auth.repositories.user import UserRepository
from commerce_auth.services._shared.base import ServiceContext
from commerce_auth.services._shared.ports import (
    Clock,
    InMemoryDenylistStore,
    PasswordHasher,
    SystemClock,
    TokenDenylistStore,
)
from commerce_auth.services.auth import AuthService, CredentialAuthenticator
from commerce_auth.services.rate_limit import RateLimiter, RateLimitPolicy
from commerce_auth.services.tokens import TokenConfig, TokenIssuer, TokenValidator

log = logging.getLogger(__name__)

EXTENSION_KEY = "commerce_auth"


@dataclass(slots=True)
class AuthComponents:
    """Application-scoped singletons shared by every request."""

    clock: Clock
    hasher: PasswordHasher
    decoy_hash: str
    token_cfg: TokenConfig
    issuer: TokenIssuer
    validator: TokenValidator
    rate_limiter: RateLimiter
    denylist: TokenDenylistStore
    login_policy: RateLimitPolicy
    refresh_policy: RateLimitPolicy


def init_app(app: Flask, *, clock: Clock | None = None) -> AuthComponents:
    """Load key material and wire the authentication core into ``app``.

    Parameters
    ----------
    app: flask.Flask
        Application providing the ``JWT_*``, ``*_TTL_SECONDS`` and
        ``*_RATE_LIMIT_*`` settings.
    clock: Clock | None
        Time source shared by every component; defaults to the system clock.

    Raises
    ------
    KeyMaterialError
        When either PEM file is missing or unparseable. The application must
        not start without signing capability.
    """
    cfg = app.config
    clock = clock or SystemClock()

    keys = PemKeyStore(cfg["JWT_PRIVATE_KEY_PATH"], cfg["JWT_PUBLIC_KEY_PATH"])
    private_key = keys.load_private_key()
    public_key = keys.load_public_key()

    token_cfg = TokenConfig(
        access_expires=timedelta(seconds=cfg["ACCESS_TOKEN_TTL_SECONDS"]),
        refresh_expires=timedelta(seconds=cfg["REFRESH_TOKEN_TTL_SECONDS"]),
        issuer=cfg["JWT_ISSUER"],
        algorithm=cfg.get("JWT_ALGORITHM", "RS256"),
    )

    # flask-jwt-extended verifies bearer tokens on protected routes
    cfg["JWT_ALGORITHM"] = token_cfg.algorithm
    cfg["JWT_DECODE_ALGORITHMS"] = [token_cfg.algorithm]
    cfg["JWT_PRIVATE_KEY"] = private_key
    cfg["JWT_PUBLIC_KEY"] = public_key
    cfg["JWT_ENCODE_ISSUER"] = token_cfg.issuer
    cfg["JWT_DECODE_ISSUER"] = token_cfg.issuer

    sweep_seconds = int(cfg.get("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", 60))
    redis_client = get_redis()
    denylist: TokenDenylistStore = (
        RedisTokenDenylistStore(redis_client, clock=clock)
        if redis_client is not None
        else InMemoryDenylistStore(clock=clock)
    )

    hasher = WerkzeugPasswordHasher(cfg.get("PASSWORD_HASH_METHOD"))
    components = AuthComponents(
        clock=clock,
        hasher=hasher,
        decoy_hash=hasher.hash(secrets.token_urlsafe(32)),
        token_cfg=token_cfg,
        issuer=TokenIssuer(private_key=private_key, cfg=token_cfg, clock=clock),
        validator=TokenValidator(public_key=public_key, cfg=token_cfg, clock=clock),
        rate_limiter=RateLimiter(
            clock=clock,
            sweep_interval=timedelta(seconds=sweep_seconds) if sweep_seconds > 0 else None,
        ),
        denylist=denylist,
        login_policy=RateLimitPolicy(
            max_attempts=cfg["LOGIN_RATE_LIMIT_MAX_ATTEMPTS"],
            window=timedelta(minutes=cfg["LOGIN_RATE_LIMIT_WINDOW_MINUTES"]),
            key_fn=endpoint_key("login"),
        ),
        refresh_policy=RateLimitPolicy(
            max_attempts=cfg["REFRESH_RATE_LIMIT_MAX_ATTEMPTS"],
            window=timedelta(minutes=cfg["REFRESH_RATE_LIMIT_WINDOW_MINUTES"]),
            key_fn=endpoint_key("refresh"),
        ),
    )
    app.extensions[EXTENSION_KEY] = components
    log_event(
        log,
        "auth.container.ready",
        message=f"auth core ready (denylist={type(denylist).__name__})",
    )
    return components


def get_components() -> AuthComponents:
    """Return the components bound to the current application."""
    return current_app.extensions[EXTENSION_KEY]


def build_auth_service() -> AuthService:
    """Assemble an :class:`AuthService` for the current request."""
    c = get_components()
    users = UserRepository()
    return AuthService(
        authenticator=CredentialAuthenticator(
            users=users, hasher=c.hasher, decoy_hash=c.decoy_hash
        ),
        users=users,
        issuer=c.issuer,
        validator=c.validator,
        rate_limiter=c.rate_limiter,
        login_policy=c.login_policy,
        denylist=c.denylist,
        clock=c.clock,
        ctx=ServiceContext(client_ip=client_ip()),
    )
