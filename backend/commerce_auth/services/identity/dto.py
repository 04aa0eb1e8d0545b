"""
Identity snapshot shared by the authentication core.

The user store owns identities; the core only ever reads these immutable
snapshots to verify credentials and mint tokens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    """Coarse authorization group carried in access tokens (``groups`` claim)."""

    CUSTOMER = "CUSTOMER"
    SELLER = "SELLER"
    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Read-only view of a stored user.

    :param id: Stable identifier (token ``sub``).
    :type id: str
    :param name: Display name.
    :type name: str
    :param email: Login email, normalized (trimmed, lowercase).
    :type email: str
    :param password_hash: One-way password hash; never serialized.
    :type password_hash: str
    :param role: Authorization group.
    :type role: Role
    :param active: Whether the account may authenticate.
    :type active: bool
    """

    id: str
    name: str
    email: str
    password_hash: str = field(repr=False)
    role: Role = Role.CUSTOMER
    active: bool = True


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lowercased."""
    return (email or "").strip().lower()
