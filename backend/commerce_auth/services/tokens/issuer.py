# commerce_auth/services/tokens/issuer.py
from __future__ import annotations

import uuid
from datetime import timedelta
from typing import Any

import jwt
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes

from commerce_auth.services._shared.ports.clock import Clock, SystemClock
from commerce_auth.services.identity.dto import Identity
from commerce_auth.services.tokens.dto import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, TokenConfig


class TokenIssuer:
    """
    Build and sign access/refresh JWTs from an :class:`Identity` snapshot.

    ``iat`` is taken from the injected clock (whole seconds) and
    ``exp = iat + ttl`` for the token kind, so lifetimes are exact.

    :param private_key: Signing key loaded by the key store.
    :param cfg: Lifetimes, issuer and algorithm.
    :param clock: Time source; defaults to :class:`SystemClock`.
    """

    def __init__(
        self,
        *,
        private_key: PrivateKeyTypes,
        cfg: TokenConfig,
        clock: Clock | None = None,
    ) -> None:
        self._key = private_key
        self.cfg = cfg
        self._clock = clock or SystemClock()

    def issue_access(self, identity: Identity, *, fresh: bool = True) -> str:
        """
        Mint an access token carrying profile claims.

        :param identity: User snapshot.
        :param fresh: ``True`` right after a credential check, ``False`` when
            minted from a refresh token.
        :returns: Encoded JWT.
        """
        claims = self._base_claims(identity, ACCESS_TOKEN_TYPE, self.cfg.access_expires)
        claims.update(
            {
                "name": identity.name,
                "email": identity.email,
                "groups": [identity.role.value],
                "fresh": fresh,
            }
        )
        return self._sign(claims)

    def issue_refresh(self, identity: Identity) -> str:
        """Mint a refresh token: subject, kind and lifetime only, no profile claims."""
        claims = self._base_claims(identity, REFRESH_TOKEN_TYPE, self.cfg.refresh_expires)
        return self._sign(claims)

    # ------------------------------------------------------------------ #

    def _base_claims(self, identity: Identity, kind: str, ttl: timedelta) -> dict[str, Any]:
        iat = int(self._clock.now().timestamp())
        return {
            "iss": self.cfg.issuer,
            "sub": str(identity.id),
            "type": kind,
            "jti": uuid.uuid4().hex,
            "iat": iat,
            "exp": iat + int(ttl.total_seconds()),
        }

    def _sign(self, claims: dict[str, Any]) -> str:
        return jwt.encode(claims, self._key, algorithm=self.cfg.algorithm)
