from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    """
    Rate-limit binding for one endpoint.

    :param max_attempts: Attempts admitted per window.
    :type max_attempts: int
    :param window: Window length.
    :type window: timedelta
    :param key_fn: Zero-argument callable returning the counter key for the
        current request (e.g. ``"login:203.0.113.7"``). ``None`` when the
        caller supplies keys explicitly.
    :type key_fn: Callable[[], str] | None
    """

    max_attempts: int
    window: timedelta
    key_fn: Callable[[], str] | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.window <= timedelta(0):
            raise ValueError("window must be positive")
