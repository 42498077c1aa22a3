"""Command: print the merged skeleton."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from skel.commands._base import SkelCommand

if TYPE_CHECKING:
    from skel.commands._context import AppContext


@click.command(
    cls=SkelCommand,
    examples="""\
  skel show
  skel -c ../other-project show
  skel --json show""",
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the merged project and skeleton configuration."""
    app.emit(app.service.show())
