"""Command: print content in application order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from skel.commands._base import SkelCommand

if TYPE_CHECKING:
    from skel.commands._context import AppContext


@click.command(
    cls=SkelCommand,
    examples="""\
  skel plan
  skel -q plan
  skel --json plan""",
)
@click.pass_obj
def plan(app: AppContext) -> None:
    """Show skeleton content in dependency order."""
    app.emit(app.service.plan())
