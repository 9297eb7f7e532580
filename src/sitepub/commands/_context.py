"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitepub.config.logging import bind_log_context, configure_logging
from sitepub.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from sitepub.config.settings import SitepubSettings
    from sitepub.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: SitepubSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        self.bind_log_context(
            destination=settings.remote.destination,
            config=str(settings.config_path) if settings.config_path else None,
        )

    def bind_log_context(self, **values: object) -> None:
        """Add fields to every log event for the rest of this invocation."""
        bind_log_context(**values)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with ``result.exit_code`` so a
          failed transfer's own status reaches the caller unchanged.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(result.exit_code)
