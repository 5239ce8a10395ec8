"""CLI commands for the user's profile (shipping details)."""

from __future__ import annotations

import click

from storefront.application.save_profile import SaveProfileHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import profile_repository
from storefront.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("set")
@click.option("--name", default=None, help="Full name.")
@click.option("--email", default=None, help="Email address.")
@click.option("--address", default=None, help="Shipping address.")
@pass_cli_context
def profile_set(
    obj: CliContext, name: str | None, email: str | None, address: str | None
) -> None:
    """Create or update the profile of --user."""
    handler = SaveProfileHandler(profile_repo=profile_repository(obj.settings))

    try:
        profile = handler.handle(obj.user_id, name=name, email=email, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Profile saved for '{profile.id}'")
    click.echo(f"  Name:    {profile.name}")
    click.echo(f"  Email:   {profile.email}")
    click.echo(f"  Address: {profile.address or '(none)'}")
