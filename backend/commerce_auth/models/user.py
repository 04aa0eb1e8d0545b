"""User model backing the identity directory."""

from __future__ import annotations

from sqlalchemy import Boolean, Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from commerce_auth.core.extensions import db
from commerce_auth.services.identity.dto import Identity, Role, normalize_email

from .base import ReprMixin, TimestampMixin, UUIDPKMixin


class User(UUIDPKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Stored account that authenticates against the API.

    Fields
    ------
    name : str
        Display name (``name`` claim of access tokens).
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    password_hash : str
        Hash produced by the configured ``PasswordHasher``; plaintext never
        reaches the model.
    role : Role
        Authorization group (``groups`` claim).
    active : bool
        Deactivated accounts cannot log in nor refresh.
    """

    __tablename__ = "users"

    # Columns
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", native_enum=False, length=16),
        nullable=False,
        default=Role.CUSTOMER,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Constraints & indexes
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_email", "email"),
    )

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = normalize_email(value)
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        v = (value or "").strip()
        if not v:
            raise ValueError("Name is required.")
        return v

    # -------------------- Snapshot --------------------
    def to_identity(self) -> Identity:
        """Return the immutable snapshot consumed by the authentication core."""
        return Identity(
            id=self.id,
            name=self.name,
            email=self.email,
            password_hash=self.password_hash,
            role=Role(self.role),
            active=bool(self.active),
        )
