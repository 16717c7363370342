"""Flask CLI commands for managing login accounts."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from blog_auth.infra.security import WerkzeugHasher
from blog_auth.models.user import Role, User
from blog_auth.services._shared.errors import ConflictError
from blog_auth.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_EMAIL = "admin@example.com"
DEFAULT_ADMIN_PASSWORD = "admin123"


def create_user(
    *,
    username: str,
    email: str,
    password: str,
    role: Role = Role.AUTHOR,
) -> str:
    """
    Hash ``password`` and persist a new user.

    :returns: The new user id.
    :raises ConflictError: if the username or email is taken.
    """
    hasher = WerkzeugHasher(current_app.config.get("PASSWORD_HASH_METHOD", "scrypt"))
    with SQLAlchemyUnitOfWork() as uow:
        if uow.users.exists_by_username_or_email(username, email):
            raise ConflictError("User", "username or email already registered")
        user: User = uow.users.create(
            username=username,
            email=email,
            password_hash=hasher.hash(password),
            role=role,
        )
        user_id = user.id
    LOGGER.info("User created", extra={"user_id": user_id})
    return user_id


def _ensure_non_production() -> None:
    """Abort commands with well-known credentials when running in production."""
    if str(current_app.config.get("APP_ENV", "")).lower() == "production":
        raise click.UsageError("'flask users seed-admin' is restricted to non-production.")


@click.group("users")
def users_cli() -> None:
    """Manage login accounts."""


@users_cli.command("create")
@click.argument("username")
@click.argument("email")
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role]),
    default=Role.AUTHOR.value,
    show_default=True,
)
@click.password_option("--password", help="Prompted when omitted.")
@with_appcontext
def create_command(username: str, email: str, role: str, password: str) -> None:
    """Create USERNAME with EMAIL."""
    try:
        user_id = create_user(username=username, email=email, password=password, role=Role(role))
    except (ConflictError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user {username} ({user_id})")


@users_cli.command("seed-admin")
@with_appcontext
def seed_admin_command() -> None:
    """Create the development admin account unless it already exists."""
    _ensure_non_production()
    try:
        user_id = create_user(
            username=DEFAULT_ADMIN_USERNAME,
            email=DEFAULT_ADMIN_EMAIL,
            password=DEFAULT_ADMIN_PASSWORD,
            role=Role.ADMIN,
        )
    except ConflictError:
        click.echo("Admin user already present")
        return
    click.echo(f"Created admin user ({user_id})")
