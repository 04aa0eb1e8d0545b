"""Unit tests for UserRepository."""

from __future__ import annotations

import pytest
from commerce_auth.repositories.user import UserRepository
from commerce_auth.services.identity.dto import Identity, Role
from sqlalchemy.exc import IntegrityError

from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` serves identity snapshots and persists users."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_find_by_email_returns_identity_snapshot(self, repo, session):
        user = UserFactory(email="alice@example.com", name="Alice", role=Role.SELLER)
        session.commit()

        identity = repo.find_by_email("alice@example.com")
        assert isinstance(identity, Identity)
        assert identity.id == user.id
        assert identity.name == "Alice"
        assert identity.role is Role.SELLER
        assert identity.active is True
        assert identity.password_hash == user.password_hash

    def test_find_by_email_is_case_insensitive(self, repo, session):
        UserFactory(email="bob@example.com")
        session.commit()

        assert repo.find_by_email("  BOB@Example.com ") is not None
        assert repo.find_by_email("nobody@example.com") is None

    def test_find_by_id(self, repo, session):
        user = UserFactory()
        session.commit()

        assert repo.find_by_id(user.id).email == user.email
        assert repo.find_by_id("00000000-0000-0000-0000-000000000000") is None
        assert repo.find_by_id("") is None

    def test_exists_by_email(self, repo, session):
        UserFactory(email="carol@example.com")
        session.commit()

        assert repo.exists_by_email("carol@example.com")
        assert not repo.exists_by_email("nonexistent@example.com")

    def test_create_assigns_uuid_and_normalizes_email(self, repo, session):
        identity = repo.create(name=" Dana ", email="Dana@Example.COM", password_hash="h")
        session.commit()

        assert len(identity.id) == 36
        assert identity.email == "dana@example.com"
        assert identity.name == "Dana"
        assert identity.role is Role.CUSTOMER
        assert repo.get(identity.id) is not None

    def test_create_rejects_duplicate_email(self, repo, session):
        repo.create(name="Eve", email="eve@example.com", password_hash="h")
        session.commit()

        with pytest.raises(IntegrityError):
            repo.create(name="Eve 2", email="EVE@example.com", password_hash="h")
        session.rollback()

    def test_set_active(self, repo, session):
        user = UserFactory()
        session.commit()

        identity = repo.set_active(user.id, False)
        session.commit()
        assert identity.active is False
        assert repo.find_by_id(user.id).active is False

    def test_set_active_unknown_user(self, repo, session):
        with pytest.raises(ValueError):
            repo.set_active("missing", True)
