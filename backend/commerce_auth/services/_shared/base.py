# commerce_auth/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from commerce_auth.core import errors as api_errors
from commerce_auth.services._shared.errors import (
    AccountInactiveError,
    InvalidCredentialsError,
    InvalidTokenError,
    RateLimitExceededError,
    ServiceError,
)
from commerce_auth.services._shared.ports.clock import Clock, SystemClock


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data attached to the service's audit events.

    :param client_ip: Client address after proxy resolution.
    """

    client_ip: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Hold the injected :class:`Clock` so time-dependent rules are testable.
    * Centralize translation of service errors into API errors.

    Notes
    -----
    - Services never build HTTP responses; the global error handler calls
      :meth:`translate_exceptions` and renders the result.
    """

    def __init__(self, *, clock: Clock | None = None, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param clock: Time source; defaults to :class:`SystemClock`.
        :type clock: Clock | None
        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        """
        self.clock = clock or SystemClock()
        self.ctx = ctx or ServiceContext()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map domain/service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be rendered.
        :rtype: Exception
        """
        if isinstance(exc, InvalidCredentialsError):
            # → 401 Unauthorized
            return api_errors.Unauthorized(str(exc), code="invalid_credentials")

        if isinstance(exc, InvalidTokenError):
            # → 403 Forbidden
            return api_errors.Forbidden(str(exc), code="invalid_token")

        if isinstance(exc, AccountInactiveError):
            # → 403 Forbidden
            return api_errors.Forbidden(str(exc), code="account_inactive")

        if isinstance(exc, RateLimitExceededError):
            # → 429 Too Many Requests + Retry-After
            return api_errors.TooManyRequests(
                str(exc),
                retry_after=exc.retry_after_seconds,
                details={
                    "remaining_attempts": exc.remaining,
                    "retry_after_seconds": exc.retry_after_seconds,
                },
            )

        # Any other ServiceError subclass → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code="bad_request",
            )

        # Fallback: return untouched (will bubble up to Flask handler)
        return exc
