"""Command: publish the generated site."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitepub.commands._base import examples_option

if TYPE_CHECKING:
    from sitepub.commands._context import AppContext


@click.command()
@examples_option(
    """\
  sitepub deploy
  sitepub deploy --dry-run
  SITEPUB_SOURCE_DIR=build/site sitepub deploy
  sitepub --json deploy"""
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what rsync would change without touching the server.",
)
@click.pass_obj
def deploy(app: AppContext, dry_run: bool) -> None:
    """Mirror the generated site to the web host over rsync/SSH."""
    from sitepub.services.deploy import DeployService

    app.bind_log_context(op="deploy", dry_run=dry_run)
    app.emit(DeployService(app.settings).deploy(dry_run=dry_run))
