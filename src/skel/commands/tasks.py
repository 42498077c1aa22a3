"""Command: list merged tasks or describe one."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from skel.commands._base import SkelCommand

if TYPE_CHECKING:
    from skel.commands._context import AppContext


@click.command(
    cls=SkelCommand,
    examples="""\
  skel tasks
  skel tasks build
  skel --json tasks deploy""",
)
@click.argument("name", required=False)
@click.pass_obj
def tasks(app: AppContext, name: str | None) -> None:
    """List tasks, or show the steps of task NAME."""
    app.emit(app.service.tasks(name))
