"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are stable contracts between the authentication core and its
callers; translation to RFC 7807 responses happens in
``commerce_auth/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta

# Single outward message for every credential failure (unknown email,
# wrong password, inactive account).
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They are recoverable by the caller; none of them is process-fatal.
    """

    pass


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """
    Raised when an email/password pair cannot be authenticated.

    The message never reveals whether the email exists, the password was
    wrong, or the account is disabled.
    """

    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE) -> None:
        super().__init__(message)


class InvalidTokenError(ServiceError):
    """
    Raised when a bearer token is malformed, badly signed, expired, of the
    wrong kind, revoked, or points to an unknown subject.
    """

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class AccountInactiveError(ServiceError):
    """
    Raised at refresh time when the token subject has been deactivated.

    Login never raises this error (it uses :class:`InvalidCredentialsError`
    to avoid leaking account existence).
    """

    def __init__(self, message: str = "Account is inactive") -> None:
        super().__init__(message)


@dataclass(slots=True, eq=False)
class RateLimitExceededError(ServiceError):
    """
    Raised when a client exhausted its attempts for the current window.

    :param remaining: Attempts left in the window (always ``0`` when raised
        by the login flow).
    :type remaining: int
    :param reset_in: Delay until the window resets.
    :type reset_in: datetime.timedelta
    """

    remaining: int
    reset_in: timedelta

    @property
    def retry_after_seconds(self) -> int:
        """Whole seconds a client should wait before retrying (``Retry-After``)."""
        return max(0, math.ceil(self.reset_in.total_seconds()))

    @property
    def retry_after_minutes(self) -> int:
        """Whole minutes until reset, rounded up."""
        return math.ceil(self.retry_after_seconds / 60)

    def __str__(self) -> str:
        return f"Too many attempts. Try again in {self.retry_after_minutes} minute(s)."


# --------------------------------------------------------------------------- #
# Bootstrap errors
# --------------------------------------------------------------------------- #


class KeyMaterialError(RuntimeError):
    """
    Raised when the signing or verification key cannot be loaded.

    Not a :class:`ServiceError`; the application factory lets it propagate and
    the process does not start.
    """
