from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """One-way password hashing capability (no reverse operation)."""

    def hash(self, plain: str) -> str: ...

    def verify(self, plain: str, hashed: str) -> bool: ...
