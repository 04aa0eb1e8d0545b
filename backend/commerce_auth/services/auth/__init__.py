"""Authentication flows: credential check, login, refresh and logout."""

from __future__ import annotations

from .authenticator import CredentialAuthenticator
from .dto import AccessTokenOut, LoginIn, LogoutIn, RefreshIn, TokenPairOut
from .service import AuthService

__all__ = [
    "AuthService",
    "CredentialAuthenticator",
    # DTOs
    "AccessTokenOut",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "TokenPairOut",
]
