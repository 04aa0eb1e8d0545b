"""Expose the application factory at package level.

``from commerce_auth import create_app`` builds a fully wired application:
configuration, logging, database, key material and the auth endpoints.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
