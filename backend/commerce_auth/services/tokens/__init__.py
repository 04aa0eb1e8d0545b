"""Token issuance and verification (RS256 JWTs)."""

from __future__ import annotations

from .dto import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, TokenConfig
from .issuer import TokenIssuer
from .validator import TokenValidator

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "TokenConfig",
    "TokenIssuer",
    "TokenValidator",
]
