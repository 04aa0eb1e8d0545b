"""
In-memory, thread-safe fixed-window attempt counter.

Counters live in a fixed number of shards, each guarded by its own lock, so
a read-modify-write on one key is atomic while unrelated keys rarely contend.
Expiry is checked on every read; the periodic sweep only bounds memory.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from commerce_auth.core.logger import log_event
from commerce_auth.services._shared.ports.clock import Clock, SystemClock

log = logging.getLogger(__name__)

DEFAULT_SHARDS = 32
DEFAULT_SWEEP_INTERVAL = timedelta(seconds=60)


@dataclass(frozen=True, slots=True)
class RateLimitCounter:
    """
    Attempts recorded for one key inside one window.

    :ivar key: Caller-supplied key (typically ``endpoint:ip``).
    :ivar count: Attempts seen in the window, admitted or not.
    :ivar window_start: Instant of the first attempt of the window.
    :ivar window: Window length the counter was opened with.
    """

    key: str
    count: int
    window_start: datetime
    window: timedelta

    def resets_at(self, window: timedelta | None = None) -> datetime:
        return self.window_start + (self.window if window is None else window)

    def is_expired(self, now: datetime, window: timedelta | None = None) -> bool:
        # live only while now < window_start + window
        return now >= self.resets_at(window)

    def increment(self) -> RateLimitCounter:
        return replace(self, count=self.count + 1)


class _Shard:
    __slots__ = ("lock", "counters")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.counters: dict[str, RateLimitCounter] = {}


class RateLimiter:
    """
    Concurrent, self-expiring counter store keyed by arbitrary strings.

    The limiter never raises: :meth:`admit` returning ``False`` is the
    caller's cue to reject the request.

    :param clock: Time source; defaults to :class:`SystemClock`.
    :param shards: Number of independently locked partitions.
    :param sweep_interval: Minimum delay between two passive purges of expired
        counters; ``None`` disables the sweep.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        shards: int = DEFAULT_SHARDS,
        sweep_interval: timedelta | None = DEFAULT_SWEEP_INTERVAL,
    ) -> None:
        if shards < 1:
            raise ValueError("shards must be >= 1")
        self._clock = clock or SystemClock()
        self._shards = tuple(_Shard() for _ in range(shards))
        self._sweep_interval = sweep_interval
        self._sweep_lock = threading.Lock()
        self._last_sweep = self._clock.now()

    # ------------------------------------------------------------------ #
    # Decisions
    # ------------------------------------------------------------------ #

    def admit(self, key: str, max_attempts: int, window: timedelta) -> bool:
        """
        Record one attempt for ``key`` and decide whether it may proceed.

        A missing or expired counter is replaced by a fresh one with
        ``count=1``; otherwise the count is incremented. The attempt is
        admitted iff the post-increment count is ``<= max_attempts``, so the
        call reaching exactly ``max_attempts`` still passes.

        :param key: Counter key.
        :param max_attempts: Attempts admitted per window.
        :param window: Window length.
        :returns: ``True`` when admitted.
        """
        now = self._clock.now()
        self._maybe_sweep(now)

        shard = self._shard_for(key)
        with shard.lock:
            current = shard.counters.get(key)
            if current is None or current.is_expired(now, window):
                current = RateLimitCounter(key=key, count=1, window_start=now, window=window)
            else:
                current = current.increment()
            shard.counters[key] = current

        admitted = current.count <= max_attempts
        if not admitted:
            log_event(
                log,
                "rate_limit.denied",
                level=logging.WARNING,
                rate_limit_key=key,
                remaining=0,
            )
        return admitted

    def record_success(self, key: str) -> None:
        """Forget ``key`` immediately so the next attempt starts a fresh window."""
        shard = self._shard_for(key)
        with shard.lock:
            shard.counters.pop(key, None)

    # ------------------------------------------------------------------ #
    # Telemetry
    # ------------------------------------------------------------------ #

    def remaining(self, key: str, max_attempts: int, window: timedelta) -> int:
        """Attempts still admitted in the current window (``max_attempts`` if none is open)."""
        counter = self._live_counter(key, window)
        if counter is None:
            return max_attempts
        return max(0, max_attempts - counter.count)

    def reset_delay(self, key: str, window: timedelta) -> timedelta:
        """Time until the open window closes, rounded up to whole seconds; zero if none."""
        now = self._clock.now()
        counter = self._live_counter(key, window, now=now)
        if counter is None:
            return timedelta(0)
        left = counter.resets_at(window) - now
        if left <= timedelta(0):
            return timedelta(0)
        return timedelta(seconds=math.ceil(left.total_seconds()))

    def snapshot(self, key: str) -> RateLimitCounter | None:
        """Return the stored counter for ``key`` (expired or not), if any."""
        shard = self._shard_for(key)
        with shard.lock:
            return shard.counters.get(key)

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.counters)
        return total

    # ------------------------------------------------------------------ #
    # Expiry sweep
    # ------------------------------------------------------------------ #

    def sweep(self, now: datetime | None = None) -> int:
        """
        Purge counters whose own window has elapsed.

        Each shard is swept under its own lock, so an increment racing with
        the purge either lands before it (and is purged with an expired
        window) or after it (and re-creates the counter).

        :returns: Number of counters removed.
        """
        now = now or self._clock.now()
        removed = 0
        for shard in self._shards:
            with shard.lock:
                expired = [k for k, c in shard.counters.items() if c.is_expired(now)]
                for k in expired:
                    del shard.counters[k]
                removed += len(expired)
        if removed:
            log.debug("rate_limit.sweep removed=%s", removed)
        return removed

    def _maybe_sweep(self, now: datetime) -> None:
        if self._sweep_interval is None or now - self._last_sweep < self._sweep_interval:
            return
        # a single sweeper at a time; others skip rather than wait
        if not self._sweep_lock.acquire(blocking=False):
            return
        try:
            if now - self._last_sweep < self._sweep_interval:
                return
            self._last_sweep = now
            self.sweep(now)
        finally:
            self._sweep_lock.release()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _shard_for(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def _live_counter(
        self, key: str, window: timedelta, *, now: datetime | None = None
    ) -> RateLimitCounter | None:
        now = now or self._clock.now()
        counter = self.snapshot(key)
        if counter is None or counter.is_expired(now, window):
            return None
        return counter
