from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Protocol

from commerce_auth.services.identity.dto import Identity, normalize_email


class UserDirectory(Protocol):
    """
    Read port over the user store.

    Implementations must return fully populated, immutable
    :class:`~commerce_auth.services.identity.dto.Identity` snapshots.
    """

    def find_by_email(self, email: str) -> Identity | None: ...

    def find_by_id(self, user_id: str) -> Identity | None: ...


class InMemoryUserDirectory(UserDirectory):
    """Dictionary-backed directory used in unit tests."""

    def __init__(self, identities: Iterable[Identity] = ()) -> None:
        self._by_id: dict[str, Identity] = {}
        self._lock = threading.Lock()
        for identity in identities:
            self.save(identity)

    def save(self, identity: Identity) -> Identity:
        with self._lock:
            self._by_id[identity.id] = identity
        return identity

    def find_by_email(self, email: str) -> Identity | None:
        wanted = normalize_email(email)
        for identity in list(self._by_id.values()):
            if identity.email == wanted:
                return identity
        return None

    def find_by_id(self, user_id: str) -> Identity | None:
        return self._by_id.get(user_id)
