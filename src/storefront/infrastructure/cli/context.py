"""Shared state handed from the root command group to every subcommand."""

from __future__ import annotations

from dataclasses import dataclass

import click

from storefront.application.session import require_user
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import profile_repository
from storefront.infrastructure.config import Settings
from storefront.infrastructure.session import ProfileSessionProvider


@dataclass(frozen=True)
class CliContext:
    settings: Settings
    user_id: str | None = None

    def require_user_id(self) -> str:
        """Resolve the signed-in user or stop with a CLI error."""
        session = ProfileSessionProvider(self.user_id, profile_repository(self.settings))
        try:
            return require_user(session)
        except DomainException as exc:
            raise click.ClickException(
                f"{exc} (pass --user with a saved profile)"
            ) from exc


pass_cli_context = click.make_pass_decorator(CliContext)
