"""Factory Boy definition for :class:`commerce_auth.models.user.User`."""

from __future__ import annotations

import factory
from commerce_auth.core.container import get_components
from commerce_auth.models.user import User
from commerce_auth.services.identity.dto import Role

from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """Build persisted users hashed exactly like accounts created by the app."""

    class Meta:
        model = User

    name = factory.Faker("name")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    role = Role.CUSTOMER
    active = True
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Hash through the application's configured password hasher."""
        obj.password_hash = get_components().hasher.hash(extracted or DEFAULT_PASSWORD)
