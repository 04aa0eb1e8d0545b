"""Shared API helpers for responses, authentication and rate limiting."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import verify_jwt_in_request

from commerce_auth.core.container import get_components
from commerce_auth.core.proxy import client_ip
from commerce_auth.services._shared.errors import RateLimitExceededError
from commerce_auth.services.rate_limit import RateLimitPolicy

F = TypeVar("F", bound=Callable[..., Any])


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def rate_limited(policy_fn: Callable[[], RateLimitPolicy]) -> Callable[[F], F]:
    """Count one attempt per call and reject with 429 once the policy is exhausted.

    Parameters
    ----------
    policy_fn:
        Zero-argument callable resolved on every request, so policies built at
        application start (from config) can be looked up lazily.

    Notes
    -----
    The key is ``policy.key_fn()`` when set, else ``"<endpoint>:<client-ip>"``.
    Counters are not cleared on success: this is a throughput limit.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            policy = policy_fn()
            key = policy.key_fn() if policy.key_fn else f"{request.endpoint}:{client_ip()}"
            limiter = get_components().rate_limiter
            if not limiter.admit(key, policy.max_attempts, policy.window):
                raise RateLimitExceededError(
                    remaining=limiter.remaining(key, policy.max_attempts, policy.window),
                    reset_in=limiter.reset_delay(key, policy.window),
                )
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
