"""Subcommand modules for skel.

Provides register_commands() which uses deferred imports to keep
``skel --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from skel.commands.plan import plan
    from skel.commands.show import show
    from skel.commands.tasks import tasks

    cli.add_command(show)
    cli.add_command(plan)
    cli.add_command(tasks)
