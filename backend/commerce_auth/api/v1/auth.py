"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request
from flask_jwt_extended import get_jwt_identity

from commerce_auth.api.deps import json_response, rate_limited, require_auth, timing
from commerce_auth.core.container import build_auth_service, get_components
from commerce_auth.core.errors import Unauthorized
from commerce_auth.repositories.user import UserRepository
from commerce_auth.schemas import (
    AccessTokenSchema,
    LoginSchema,
    LogoutSchema,
    MeSchema,
    RefreshSchema,
    TokenPairSchema,
)
from commerce_auth.services.auth import LoginIn, LogoutIn, RefreshIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
token_pair_schema = TokenPairSchema()
access_token_schema = AccessTokenSchema()
me_schema = MeSchema()


def _refresh_rate_limit():
    return get_components().refresh_policy


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access/refresh token pair.

    Throttled per client address by the login flow itself; a successful login
    resets the client's counter.
    """

    data = login_schema.load(request.get_json(silent=True) or {})
    policy = get_components().login_policy
    service = build_auth_service()
    pair = service.login(
        LoginIn(email=data["email"], password=data["password"], rate_limit_key=policy.key_fn())
    )
    return json_response({"data": token_pair_schema.dump(pair)})


@bp.post("/refresh")
@rate_limited(_refresh_rate_limit)
@timing
def refresh():
    """Exchange a refresh token for a new access token."""

    data = refresh_schema.load(request.get_json(silent=True) or {})
    out = build_auth_service().refresh(RefreshIn(refresh_token=data["refresh_token"]))
    return json_response({"data": access_token_schema.dump(out)})


@bp.post("/logout")
@timing
def logout():
    """Revoke a refresh token until it expires."""

    data = logout_schema.load(request.get_json(silent=True) or {})
    build_auth_service().logout(LogoutIn(refresh_token=data["refresh_token"]))
    return "", 204


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the profile of the access token's subject."""

    identity = UserRepository().find_by_id(str(get_jwt_identity()))
    if identity is None:
        raise Unauthorized("Token subject no longer exists", code="invalid_token")
    return json_response({"data": me_schema.dump(identity)})
