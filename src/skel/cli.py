"""Root CLI group for skel with global flags and command registration."""

from __future__ import annotations

import click

from skel import __version__
from skel.commands import register_commands
from skel.commands._base import SkelGroup
from skel.commands._context import AppContext
from skel.config.settings import SkelSettings


@click.group(cls=SkelGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="skel")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Project config file or directory (default: ./.skeleton.kdl).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """skel — apply a shared project skeleton with per-project overrides."""
    settings = SkelSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
