"""User repository: SQLAlchemy adapter for the ``UserDirectory`` port."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from commerce_auth.core.extensions import db
from commerce_auth.models.user import User
from commerce_auth.services.identity.dto import Identity, Role, normalize_email


class UserRepository:
    """Persistence-only repository for :class:`User`.

    Lookups return :class:`Identity` snapshots so ORM instances never leak
    into the authentication core. This repository NEVER handles tokens or
    password verification.

    :param session: Explicit session; defaults to the Flask-SQLAlchemy
        scoped session of the current app context.
    """

    model = User

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else db.session

    # ---------------------------- Lookup helpers ----------------------------

    def get(self, user_id: str) -> User | None:
        """Fetch the ORM row by primary key."""
        return cast(User | None, self.session.get(User, user_id))

    def get_by_email(self, email: str) -> User | None:
        """Fetch the ORM row by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == normalize_email(email))
        return bool(self.session.execute(stmt).first())

    # ---------------------------- UserDirectory ----------------------------

    def find_by_email(self, email: str) -> Identity | None:
        user = self.get_by_email(email)
        return user.to_identity() if user is not None else None

    def find_by_id(self, user_id: str) -> Identity | None:
        if not user_id:
            return None
        user = self.get(user_id)
        return user.to_identity() if user is not None else None

    # ---------------------------- Writes ----------------------------

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.CUSTOMER,
        active: bool = True,
    ) -> Identity:
        """Insert a new user from an already hashed password and flush.

        :returns: Snapshot of the persisted user (id assigned).
        :rtype: Identity
        """
        user = User(name=name, email=email, password_hash=password_hash, role=role, active=active)
        self.session.add(user)
        self.session.flush()
        return user.to_identity()

    def set_active(self, user_id: str, active: bool) -> Identity:
        """Activate or deactivate an account and flush.

        :raises ValueError: If the user does not exist.
        """
        user = self.get(user_id)
        if user is None:
            raise ValueError(f"User {user_id} not found.")
        user.active = active
        self.session.flush()
        return user.to_identity()
