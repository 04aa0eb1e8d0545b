# commerce_auth/infra/security/werkzeug_password_hasher.py
from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from commerce_auth.services._shared.ports.password_hasher import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """
    Salted one-way hashing through :mod:`werkzeug.security`.

    :param method: Werkzeug method string (e.g. ``"scrypt"``,
        ``"pbkdf2:sha256:600000"``); ``None`` keeps Werkzeug's default.
    """

    def __init__(self, method: str | None = None) -> None:
        self.method = method

    def hash(self, plain: str) -> str:
        if self.method is None:
            return generate_password_hash(plain)
        return generate_password_hash(plain, method=self.method)

    def verify(self, plain: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return check_password_hash(hashed, plain)
        except ValueError:
            # unknown or corrupt hash format
            return False
