# commerce_auth/infra/redis/redis_denylist_store.py
from __future__ import annotations

import math
from datetime import datetime
from typing import cast

import redis  # type: ignore[import-untyped]

from commerce_auth.services._shared.ports.clock import Clock, SystemClock
from commerce_auth.services._shared.ports.denylist_store import TokenDenylistStore


class RedisTokenDenylistStore(TokenDenylistStore):
    """
    Shared denylist for **refresh tokens** by jti.

    Each revoked id is a marker key whose TTL matches the token's remaining
    lifetime, so Redis forgets it once the token could no longer be used.

    :param r: A Redis client (already connected).
    :param clock: Time source used to compute TTLs.
    """

    def __init__(self, r: redis.Redis, clock: Clock | None = None) -> None:
        self.r = r
        self._clock = clock or SystemClock()

    @staticmethod
    def _k(jti: str) -> str:
        return f"deny:rt:{jti}"

    def is_revoked(self, jti: str) -> bool:
        return cast(int, self.r.exists(self._k(jti))) == 1

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        remaining = (expires_at - self._clock.now()).total_seconds()
        if remaining <= 0:
            # already unusable
            return
        # idempotent marker with TTL
        self.r.set(self._k(jti), "1", ex=max(1, math.ceil(remaining)))
