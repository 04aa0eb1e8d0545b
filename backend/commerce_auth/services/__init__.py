"""Service layer public API.

This package exposes the authentication core so that callers can import from
:mod:`commerce_auth.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``commerce_auth.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Identity snapshot (from ``commerce_auth.services.identity.dto``)
    * :class:`Identity`, :class:`Role`

- Rate limiting (from ``commerce_auth.services.rate_limit``)
    * :class:`RateLimiter`, :class:`RateLimitPolicy`

- Tokens (from ``commerce_auth.services.tokens``)
    * :class:`TokenIssuer`, :class:`TokenValidator`, :class:`TokenConfig`

- Auth flows (from ``commerce_auth.services.auth``)
    * :class:`AuthService`, :class:`CredentialAuthenticator`
    * DTOs: :class:`LoginIn`, :class:`RefreshIn`, :class:`LogoutIn`,
      :class:`TokenPairOut`, :class:`AccessTokenOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext

# Auth flows + DTOs
from .auth import (
    AccessTokenOut,
    AuthService,
    CredentialAuthenticator,
    LoginIn,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)
from .identity.dto import Identity, Role
from .rate_limit import RateLimiter, RateLimitPolicy
from .tokens import TokenConfig, TokenIssuer, TokenValidator

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Identity
    "Identity",
    "Role",
    # Rate limiting
    "RateLimiter",
    "RateLimitPolicy",
    # Tokens
    "TokenConfig",
    "TokenIssuer",
    "TokenValidator",
    # Auth
    "AuthService",
    "CredentialAuthenticator",
    "LoginIn",
    "RefreshIn",
    "LogoutIn",
    "TokenPairOut",
    "AccessTokenOut",
]
