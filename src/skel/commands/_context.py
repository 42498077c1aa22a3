"""Per-invocation state handed to every subcommand via ``@click.pass_obj``."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from skel.config.logging import configure_logging
from skel.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from skel.config.settings import SkelSettings
    from skel.services.result import ServiceResult
    from skel.services.skeleton import SkeletonService


class AppContext:
    """Settings, logging setup, and result output for one CLI run.

    The service is created on first use so ``--help`` and ``--version``
    never touch the filesystem.
    """

    def __init__(self, settings: SkelSettings) -> None:
        self.settings = settings
        self._service: SkeletonService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> SkeletonService:
        """The skeleton service for the configured project file."""
        if self._service is None:
            from skel.services.skeleton import SkeletonService

            self._service = SkeletonService(self.settings.config_file)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and turn a failure into exit status 1.

        * Success: writes to stdout; warnings go to stderr unless in JSON
          mode, where they are already part of the payload.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
