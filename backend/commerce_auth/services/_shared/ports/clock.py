from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    """Port for the current time; injected so expiry logic is testable."""

    def now(self) -> datetime:
        """Return the current instant as a timezone-aware UTC datetime."""
        ...


class SystemClock(Clock):
    """Wall-clock time source used in production."""

    def now(self) -> datetime:
        return datetime.now(UTC)
