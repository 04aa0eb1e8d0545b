# commerce_auth/services/auth/authenticator.py
from __future__ import annotations

import logging
import secrets
from typing import NoReturn

from commerce_auth.core.logger import log_event
from commerce_auth.services._shared.errors import InvalidCredentialsError
from commerce_auth.services._shared.ports.password_hasher import PasswordHasher
from commerce_auth.services._shared.ports.user_directory import UserDirectory
from commerce_auth.services.identity.dto import Identity, normalize_email

log = logging.getLogger(__name__)


class CredentialAuthenticator:
    """
    Verify an email/password pair against the user directory.

    Every rejection raises the same :class:`InvalidCredentialsError` with the
    same message. The password hash is always checked, against a decoy hash
    for unknown emails and before the ``active`` flag is looked at, so the
    time to reject does not reveal why.

    :param users: Read port over the user store.
    :param hasher: Password verification capability.
    :param decoy_hash: Hash compared against when the email is unknown;
        generated from a random secret when omitted.
    """

    def __init__(
        self,
        *,
        users: UserDirectory,
        hasher: PasswordHasher,
        decoy_hash: str | None = None,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self._decoy_hash = decoy_hash or hasher.hash(secrets.token_urlsafe(32))

    def authenticate(self, email: str, plain_password: str) -> Identity:
        """
        Return the identity owning ``email`` when ``plain_password`` matches.

        :raises InvalidCredentialsError: Unknown email, inactive account or
            wrong password.
        """
        identity = self.users.find_by_email(normalize_email(email))

        hashed = identity.password_hash if identity is not None else self._decoy_hash
        password_ok = self.hasher.verify(plain_password or "", hashed)

        if identity is None:
            self._reject("unknown_email")
        if not identity.active:
            self._reject("inactive", user_id=identity.id)
        if not password_ok:
            self._reject("bad_password", user_id=identity.id)
        return identity

    @staticmethod
    def _reject(reason: str, *, user_id: str | None = None) -> NoReturn:
        log_event(
            log,
            "auth.credentials.rejected",
            level=logging.WARNING,
            message=f"credential check failed ({reason})",
            user_id=user_id,
        )
        raise InvalidCredentialsError()
