from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol

from .clock import Clock, SystemClock


class TokenDenylistStore(Protocol):
    """
    Abstraction for a denylist of **refresh tokens** keyed by ``jti``.

    Entries only need to live until the token's own expiry. Methods are
    expected to be idempotent.
    """

    def is_revoked(self, jti: str) -> bool: ...
    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None: ...


class InMemoryDenylistStore(TokenDenylistStore):
    """Process-local denylist; entries drop out once the token would have expired."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_revoked(self, jti: str) -> bool:
        with self._lock:
            expires_at = self._revoked.get(jti)
            if expires_at is None:
                return False
            if expires_at <= self._clock.now():
                del self._revoked[jti]
                return False
            return True

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        now = self._clock.now()
        with self._lock:
            # purge on write to keep the table bounded
            for stale in [k for k, exp in self._revoked.items() if exp <= now]:
                del self._revoked[stale]
            if expires_at > now:
                self._revoked[jti] = expires_at

    def __len__(self) -> int:
        return len(self._revoked)
