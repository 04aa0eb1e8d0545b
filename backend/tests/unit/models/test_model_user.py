"""Tests for the User model."""

from __future__ import annotations

import pytest
from commerce_auth.models.user import User
from commerce_auth.services.identity.dto import Role

from tests.factories.user import UserFactory


class TestUser:
    def test_factory_hashes_with_configured_method(self, session, components):
        user = UserFactory(password="secret123")
        session.commit()

        assert user.password_hash.startswith("pbkdf2:sha256:1000$")
        assert components.hasher.verify("secret123", user.password_hash)

    def test_model_has_no_plaintext_password_attribute(self):
        assert not hasattr(User, "password")

    def test_email_normalized(self):
        assert User(name="A", email="  Alice@Example.COM ").email == "alice@example.com"

    @pytest.mark.parametrize("email", ["", "no-at-sign", "user@localhost"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValueError):
            User(name="A", email=email)

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            User(name="   ", email="a@example.com")

    def test_defaults_after_flush(self, session):
        u = User(name="Defaults", email="d@example.com", password_hash="h")
        session.add(u)
        session.flush()

        assert u.role is Role.CUSTOMER
        assert u.active is True
        assert u.created_at is not None

    def test_to_identity_hides_hash_in_repr(self, session):
        u = User(
            name="Snap", email="snap@example.com", password_hash="secret-hash", role=Role.ADMIN
        )
        session.add(u)
        session.flush()

        identity = u.to_identity()
        assert identity.id == u.id
        assert identity.role is Role.ADMIN
        assert "secret-hash" not in repr(identity)
