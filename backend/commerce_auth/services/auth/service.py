# commerce_auth/services/auth/service.py
from __future__ import annotations

import logging

from commerce_auth.core.logger import log_event
from commerce_auth.services._shared.base import BaseService, ServiceContext
from commerce_auth.services._shared.errors import (
    AccountInactiveError,
    InvalidTokenError,
    RateLimitExceededError,
)
from commerce_auth.services._shared.ports.clock import Clock
from commerce_auth.services._shared.ports.denylist_store import TokenDenylistStore
from commerce_auth.services._shared.ports.user_directory import UserDirectory
from commerce_auth.services.auth.authenticator import CredentialAuthenticator
from commerce_auth.services.auth.dto import (
    AccessTokenOut,
    LoginIn,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)
from commerce_auth.services.rate_limit import RateLimiter, RateLimitPolicy
from commerce_auth.services.tokens import REFRESH_TOKEN_TYPE, TokenIssuer, TokenValidator

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / refresh / logout).

    * ``login``: rate limiter → credential check → access + refresh pair.
    * ``refresh``: verify refresh token → load subject → new access token.
      Refresh tokens are not rotated.
    * ``logout``: revoke a refresh token's ``jti`` until it expires.
    """

    def __init__(
        self,
        *,
        authenticator: CredentialAuthenticator,
        users: UserDirectory,
        issuer: TokenIssuer,
        validator: TokenValidator,
        rate_limiter: RateLimiter,
        login_policy: RateLimitPolicy,
        denylist: TokenDenylistStore,
        clock: Clock | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param authenticator: Email/password verifier.
        :param users: User directory used to reload the refresh subject.
        :param issuer: Token signer.
        :param validator: Token verifier.
        :param rate_limiter: Shared attempt counter.
        :param login_policy: Attempts/window applied to ``login``.
        :param denylist: Revoked refresh-token ids.
        :param ctx: Request data (client address) stamped on audit events.
        """
        super().__init__(clock=clock, ctx=ctx)
        self.authenticator = authenticator
        self.users = users
        self.issuer = issuer
        self.validator = validator
        self.limiter = rate_limiter
        self.login_policy = login_policy
        self.denylist = denylist

    @property
    def access_ttl_seconds(self) -> int:
        return int(self.issuer.cfg.access_expires.total_seconds())

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenPairOut:
        """
        Authenticate credentials and issue a fresh token pair.

        Every call counts as one attempt for ``dto.rate_limit_key``; a
        successful login clears the counter.

        :param dto: Login input.
        :returns: Access/refresh token pair.
        :raises RateLimitExceededError: When the key exhausted its attempts.
        :raises InvalidCredentialsError: Unknown email, wrong password or
            inactive account.
        """
        key = dto.rate_limit_key
        policy = self.login_policy
        if not self.limiter.admit(key, policy.max_attempts, policy.window):
            raise RateLimitExceededError(
                remaining=self.limiter.remaining(key, policy.max_attempts, policy.window),
                reset_in=self.limiter.reset_delay(key, policy.window),
            )

        identity = self.authenticator.authenticate(dto.email, dto.password)

        self.limiter.record_success(key)
        pair = TokenPairOut(
            access_token=self.issuer.issue_access(identity, fresh=True),
            refresh_token=self.issuer.issue_refresh(identity),
            expires_in=self.access_ttl_seconds,
        )
        log_event(
            log,
            "auth.login.succeeded",
            user_id=identity.id,
            rate_limit_key=key,
            client_ip=self.ctx.client_ip,
        )
        return pair

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> AccessTokenOut:
        """
        Exchange a refresh token for a new access token.

        :raises InvalidTokenError: Invalid/expired/revoked token, access token
            presented, or unknown subject.
        :raises AccountInactiveError: Subject has been deactivated.
        """
        claims = self.validator.parse_and_verify(dto.refresh_token)
        self.validator.require_kind(claims, REFRESH_TOKEN_TYPE)

        jti = claims.get("jti")
        if jti and self.denylist.is_revoked(str(jti)):
            log_event(
                log,
                "auth.refresh.revoked",
                level=logging.WARNING,
                user_id=claims.get("sub"),
                client_ip=self.ctx.client_ip,
            )
            raise InvalidTokenError()

        identity = self.users.find_by_id(self.validator.subject(claims))
        if identity is None:
            raise InvalidTokenError()
        if not identity.active:
            log_event(
                log,
                "auth.refresh.inactive",
                level=logging.WARNING,
                user_id=identity.id,
                client_ip=self.ctx.client_ip,
            )
            raise AccountInactiveError()

        out = AccessTokenOut(
            access_token=self.issuer.issue_access(identity, fresh=False),
            expires_in=self.access_ttl_seconds,
        )
        log_event(log, "auth.refresh.succeeded", user_id=identity.id, client_ip=self.ctx.client_ip)
        return out

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke a refresh token until its natural expiry. Idempotent.

        :raises InvalidTokenError: Token invalid, expired, not a refresh token
            or without ``jti``.
        """
        claims = self.validator.parse_and_verify(dto.refresh_token)
        self.validator.require_kind(claims, REFRESH_TOKEN_TYPE)
        jti = claims.get("jti")
        if not jti:
            raise InvalidTokenError()

        self.denylist.revoke_jti(jti=str(jti), expires_at=self.validator.expires_at(claims))
        log_event(log, "auth.logout", user_id=claims.get("sub"), client_ip=self.ctx.client_ip)
