# commerce_auth/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

# Values of the ``type`` claim.
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Token emission and verification settings.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    :param issuer: Value of the ``iss`` claim, enforced on decode.
    :type issuer: str
    :param algorithm: JWS algorithm; asymmetric so verifiers only need the
        public key.
    :type algorithm: str
    """

    access_expires: timedelta
    refresh_expires: timedelta
    issuer: str
    algorithm: str = "RS256"

    def __post_init__(self) -> None:
        if self.access_expires <= timedelta(0) or self.refresh_expires <= timedelta(0):
            raise ValueError("token lifetimes must be positive")
