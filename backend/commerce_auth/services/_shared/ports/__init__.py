"""
commerce_auth.services._shared.ports
====================================

Collection of *ports* (hexagonal interfaces) that the authentication core
consumes. They keep the core independent from storage, hashing, key loading
and time.

Modules
-------
- :mod:`clock`:
    Defines :class:`~.Clock` and the production :class:`~.SystemClock`.

- :mod:`user_directory`:
    Defines :class:`~.UserDirectory`: identity lookup by email and id.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: one-way hash and verify.

- :mod:`key_store`:
    Defines :class:`~.KeyStore`: the RSA signing/verification key pair.

- :mod:`denylist_store`:
    Defines :class:`~.TokenDenylistStore`: revoked refresh tokens by ``jti``.

Design Notes
------------
Concrete adapters (SQLAlchemy, werkzeug, PEM files, Redis) live under
``commerce_auth.infra`` and ``commerce_auth.repositories``; in-memory
implementations live next to their port.
"""

from __future__ import annotations

from .clock import Clock, SystemClock
from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .key_store import KeyStore
from .password_hasher import PasswordHasher
from .user_directory import InMemoryUserDirectory, UserDirectory

__all__ = [
    "Clock",
    "SystemClock",
    "TokenDenylistStore",
    "InMemoryDenylistStore",
    "KeyStore",
    "PasswordHasher",
    "UserDirectory",
    "InMemoryUserDirectory",
]
