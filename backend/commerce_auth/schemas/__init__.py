"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AccessTokenSchema,
    LoginSchema,
    LogoutSchema,
    MeSchema,
    RefreshSchema,
    TokenPairSchema,
)

__all__ = [
    "AccessTokenSchema",
    "LoginSchema",
    "LogoutSchema",
    "MeSchema",
    "RefreshSchema",
    "TokenPairSchema",
]
