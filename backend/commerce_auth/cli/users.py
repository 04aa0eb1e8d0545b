"""User administration commands."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from commerce_auth.core.container import get_components
from commerce_auth.core.extensions import db
from commerce_auth.repositories.user import UserRepository
from commerce_auth.services.identity.dto import Role

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """Seed and administer user accounts."""


@users_cli.command("create-admin")
@click.option("--email", required=True)
@click.option("--name", default="Administrator", show_default=True)
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def create_admin(email: str, name: str, password: str) -> None:
    """Create an ADMIN account; does nothing when the email is already taken."""
    repo = UserRepository()
    if repo.exists_by_email(email):
        click.echo(f"User {email} already exists; nothing to do.")
        return

    identity = repo.create(
        name=name,
        email=email,
        password_hash=get_components().hasher.hash(password),
        role=Role.ADMIN,
    )
    db.session.commit()
    LOGGER.info("users.create_admin id=%s", identity.id)
    click.echo(f"Created admin {identity.email} ({identity.id}).")


@users_cli.command("set-active")
@click.argument("email")
@click.option("--active/--inactive", default=True, show_default=True)
@with_appcontext
def set_active(email: str, active: bool) -> None:
    """Activate or deactivate the account owning EMAIL."""
    repo = UserRepository()
    user = repo.get_by_email(email)
    if user is None:
        raise click.UsageError(f"No user with email {email}.")
    identity = repo.set_active(user.id, active)
    db.session.commit()
    state = "active" if identity.active else "inactive"
    LOGGER.info("users.set_active id=%s active=%s", identity.id, identity.active)
    click.echo(f"{identity.email} is now {state}.")
