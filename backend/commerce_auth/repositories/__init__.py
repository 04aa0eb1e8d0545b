"""Repository package exposing persistence-layer access."""

from __future__ import annotations

from commerce_auth.repositories.user import UserRepository

__all__ = ["UserRepository"]
