"""Flask CLI commands for session housekeeping."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from blog_auth.api.deps import get_auth_service
from blog_auth.services._shared.base import now_utc
from blog_auth.services._shared.errors import StorageError
from blog_auth.services.auth import LogoutIn


@click.group("sessions")
def sessions_cli() -> None:
    """Inspect and prune refresh-token sessions."""


@sessions_cli.command("prune")
@with_appcontext
def prune_command() -> None:
    """Delete expired session records."""
    try:
        deleted = get_auth_service().sessions.delete_expired(now_utc())
    except StorageError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Pruned {deleted} expired session(s)")


@sessions_cli.command("revoke")
@click.argument("user_id")
@with_appcontext
def revoke_command(user_id: str) -> None:
    """Log USER_ID out of every device."""
    result = get_auth_service().logout(LogoutIn(user_id=user_id))
    if not result.ok:
        raise click.ClickException(str(result.error))
    click.echo(f"Revoked {result.unwrap().deleted_count} session(s) for {user_id}")
