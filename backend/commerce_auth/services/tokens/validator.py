# commerce_auth/services/tokens/validator.py
from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import jwt
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from commerce_auth.services._shared.errors import InvalidTokenError
from commerce_auth.services._shared.ports.clock import Clock, SystemClock
from commerce_auth.services.tokens.dto import TokenConfig

_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenValidator:
    """
    Verify bearer tokens and extract their claims.

    Signature, structure, issuer and required claims are checked by PyJWT;
    expiry is evaluated here against the injected clock so tests can move
    time without patching the library. Every failure surfaces as
    :class:`InvalidTokenError`.

    :param public_key: Verification key loaded by the key store.
    :param cfg: Issuer and algorithm to enforce.
    :param clock: Time source; defaults to :class:`SystemClock`.
    """

    def __init__(
        self,
        *,
        public_key: PublicKeyTypes,
        cfg: TokenConfig,
        clock: Clock | None = None,
    ) -> None:
        self._key = public_key
        self.cfg = cfg
        self._clock = clock or SystemClock()

    def parse_and_verify(self, raw: str) -> dict[str, Any]:
        """
        Decode ``raw`` and return its claims.

        :raises InvalidTokenError: Bad signature, malformed token, wrong
            issuer, missing ``sub``/``iat``/``exp``, or ``now > exp``.
        """
        if not raw or not isinstance(raw, str):
            raise InvalidTokenError()
        try:
            claims: dict[str, Any] = jwt.decode(
                raw,
                self._key,
                algorithms=[self.cfg.algorithm],
                issuer=self.cfg.issuer,
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": _REQUIRED_CLAIMS,
                },
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError() from exc

        exp = claims["exp"]
        if not isinstance(exp, int | float) or isinstance(exp, bool):
            raise InvalidTokenError()
        # valid up to and including the exp second
        if self._clock.now().timestamp() > exp:
            raise InvalidTokenError()
        return claims

    @staticmethod
    def require_kind(claims: dict[str, Any], kind: str) -> None:
        """Fail unless the ``type`` claim is exactly ``kind``."""
        if claims.get("type") != kind:
            raise InvalidTokenError()

    @staticmethod
    def subject(claims: dict[str, Any]) -> str:
        """Return the non-blank ``sub`` claim."""
        sub = claims.get("sub")
        if not isinstance(sub, str) or not sub.strip():
            raise InvalidTokenError()
        return sub

    @staticmethod
    def expires_at(claims: dict[str, Any]) -> datetime:
        return datetime.fromtimestamp(claims["exp"], tz=UTC)
