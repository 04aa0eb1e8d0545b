"""End-to-end tests for the /api/v1/auth endpoints."""

from __future__ import annotations

import logging
from datetime import timedelta

import pytest
from commerce_auth.core.extensions import db as _db
from commerce_auth.factory import create_app
from commerce_auth.services._shared.errors import KeyMaterialError
from freezegun import freeze_time

from tests.factories.user import DEFAULT_PASSWORD, UserFactory

BASE = "/api/v1/auth"


def _login(client, email, password=DEFAULT_PASSWORD, **kwargs):
    return client.post(f"{BASE}/login", json={"email": email, "password": password}, **kwargs)


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user(session):
    user = UserFactory(email="shopper@example.com", name="Shopper")
    session.commit()
    return user


@pytest.fixture()
def tokens(client, user):
    resp = _login(client, user.email)
    assert resp.status_code == 200
    return resp.get_json()["data"]


# -------------------------------- /login ---------------------------------- #
def test_login_returns_token_pair(client, user, components):
    resp = _login(client, user.email)

    assert resp.status_code == 200
    body = resp.get_json()["data"]
    assert body["token_type"] == "Bearer"
    assert body["expires_in"] == 3600
    access = components.validator.parse_and_verify(body["access_token"])
    refresh = components.validator.parse_and_verify(body["refresh_token"])
    assert access["sub"] == refresh["sub"] == user.id
    assert access["groups"] == ["CUSTOMER"]


def test_wrong_password_and_unknown_email_look_the_same(client, user):
    wrong = _login(client, user.email, password="not-it")
    unknown = _login(client, "ghost@example.com")

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.mimetype == "application/problem+json"
    assert wrong.get_json()["code"] == unknown.get_json()["code"] == "invalid_credentials"
    assert wrong.get_json()["detail"] == unknown.get_json()["detail"]


def test_inactive_user_cannot_login(client, session):
    dormant = UserFactory(email="dormant@example.com", active=False)
    session.commit()

    resp = _login(client, dormant.email)
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "invalid_credentials"


def test_sixth_attempt_is_throttled(client, user):
    for _ in range(5):
        assert _login(client, user.email, password="bad").status_code == 401

    resp = _login(client, user.email, password="bad")

    assert resp.status_code == 429
    assert resp.headers["Retry-After"] == "900"
    problem = resp.get_json()
    assert problem["code"] == "too_many_requests"
    assert problem["details"] == {"remaining_attempts": 0, "retry_after_seconds": 900}
    assert "15 minute" in problem["detail"]


def test_throttle_applies_to_correct_password_too(client, user):
    for _ in range(5):
        _login(client, user.email, password="bad")
    assert _login(client, user.email).status_code == 429


def test_throttle_lifts_after_window(client, user, clock):
    for _ in range(6):
        _login(client, user.email, password="bad")

    clock.advance(minutes=15)
    assert _login(client, user.email).status_code == 200


def test_success_resets_the_counter(client, user, components):
    for _ in range(4):
        _login(client, user.email, password="bad")
    assert _login(client, user.email).status_code == 200
    assert components.rate_limiter.snapshot("login:127.0.0.1") is None

    for _ in range(5):
        assert _login(client, user.email, password="bad").status_code == 401


def test_throttle_is_per_client_address(client, user):
    for _ in range(6):
        _login(client, user.email, password="bad", environ_base={"REMOTE_ADDR": "203.0.113.1"})

    other = _login(client, user.email, environ_base={"REMOTE_ADDR": "203.0.113.2"})
    assert other.status_code == 200


def test_rotating_forwarded_for_behind_proxy_is_still_throttled(client, user):
    statuses = [
        _login(
            client,
            user.email,
            password="bad",
            headers={"X-Forwarded-For": f"198.51.100.{i}, 203.0.113.9"},
        ).status_code
        for i in range(7)
    ]
    assert statuses == [401] * 5 + [429] * 2


def test_forwarded_for_ignored_without_proxy(config, clock):
    class DirectConfig(config):
        USE_PROXYFIX = False

    direct_app = create_app(DirectConfig, clock=clock, instance_relative_config=False)
    with direct_app.app_context():
        _db.create_all()
        try:
            statuses = [
                _login(
                    direct_app.test_client(),
                    "ghost@example.com",
                    headers={"X-Forwarded-For": f"198.51.100.{i}"},
                ).status_code
                for i in range(7)
            ]
        finally:
            _db.session.remove()
            _db.drop_all()

    assert statuses == [401] * 5 + [429] * 2


def test_login_validation_error(client):
    resp = client.post(f"{BASE}/login", json={"email": "someone@example.com"})

    assert resp.status_code == 422
    problem = resp.get_json()
    assert problem["code"] == "validation_error"
    assert "password" in problem["details"]["errors"]


# ------------------------------- /refresh --------------------------------- #
def test_refresh_issues_new_access_token(client, tokens, components, clock):
    clock.advance(seconds=30)
    resp = client.post(f"{BASE}/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert resp.status_code == 200
    body = resp.get_json()["data"]
    assert set(body) == {"access_token", "token_type", "expires_in"}
    claims = components.validator.parse_and_verify(body["access_token"])
    assert claims["type"] == "access"
    assert claims["fresh"] is False


def test_access_token_rejected_at_refresh(client, tokens):
    resp = client.post(f"{BASE}/refresh", json={"refresh_token": tokens["access_token"]})

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "invalid_token"


def test_garbage_refresh_token(client, db):
    resp = client.post(f"{BASE}/refresh", json={"refresh_token": "not.a.token"})
    assert resp.status_code == 403


def test_expired_refresh_token(client, tokens, clock):
    clock.advance(days=7, seconds=1)
    resp = client.post(f"{BASE}/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 403


def test_refresh_for_deactivated_account(client, tokens, user, session):
    user.active = False
    session.commit()

    resp = client.post(f"{BASE}/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "account_inactive"


def test_refresh_is_throughput_limited(client, tokens, components):
    limit = components.refresh_policy.max_attempts
    payload = {"refresh_token": tokens["refresh_token"]}
    for _ in range(limit):
        assert client.post(f"{BASE}/refresh", json=payload).status_code == 200

    resp = client.post(f"{BASE}/refresh", json=payload)
    assert resp.status_code == 429
    assert resp.headers["Retry-After"] == "60"


# -------------------------------- /logout --------------------------------- #
def test_logout_revokes_refresh_token(client, tokens):
    payload = {"refresh_token": tokens["refresh_token"]}

    resp = client.post(f"{BASE}/logout", json=payload)
    assert resp.status_code == 204

    again = client.post(f"{BASE}/refresh", json=payload)
    assert again.status_code == 403
    assert again.get_json()["code"] == "invalid_token"


def test_logout_with_access_token_rejected(client, tokens):
    resp = client.post(f"{BASE}/logout", json={"refresh_token": tokens["access_token"]})
    assert resp.status_code == 403


# ---------------------------------- /me ----------------------------------- #
def test_me_returns_profile(client, tokens, user):
    resp = client.get(f"{BASE}/me", headers=_bearer(tokens["access_token"]))

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {
        "id": user.id,
        "name": "Shopper",
        "email": "shopper@example.com",
        "role": "CUSTOMER",
    }


def test_me_requires_token(client, db):
    resp = client.get(f"{BASE}/me")
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "unauthorized"


def test_me_rejects_refresh_token(client, tokens):
    resp = client.get(f"{BASE}/me", headers=_bearer(tokens["refresh_token"]))
    assert resp.status_code == 401
    assert resp.get_json()["code"] == "invalid_token"


def test_me_rejects_expired_access_token(client, tokens, clock):
    with freeze_time(clock.now() + timedelta(hours=2)):
        resp = client.get(f"{BASE}/me", headers=_bearer(tokens["access_token"]))

    assert resp.status_code == 401
    assert resp.get_json()["code"] == "token_expired"


# ------------------------------ plumbing ---------------------------------- #
def test_health(client):
    resp = client.get("/api/v1/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"
    assert resp.get_json()["db"] == "ok"


def test_request_id_is_echoed(client, db):
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


def test_unknown_route_is_problem_json(client, db):
    resp = client.get(f"{BASE}/nowhere")
    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"


def test_missing_key_material_prevents_startup(config, tmp_path):
    class NoKeys(config):
        JWT_PRIVATE_KEY_PATH = str(tmp_path / "absent.pem")

    with pytest.raises(KeyMaterialError):
        create_app(NoKeys, instance_relative_config=False)


def test_login_audit_event_records_client_address(client, user, caplog):
    caplog.set_level(logging.INFO, logger="commerce_auth.services.auth.service")

    _login(client, user.email, environ_base={"REMOTE_ADDR": "192.0.2.77"})

    events = [r for r in caplog.records if getattr(r, "event", None) == "auth.login.succeeded"]
    assert [r.client_ip for r in events] == ["192.0.2.77"]
