"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; worked invocations live behind ``--examples``,
which prints them and exits before the command body runs.
"""

from __future__ import annotations

from typing import Any

import click


def examples_option(text: str) -> click.Option:
    """Build the eager ``--examples`` option that prints *text*."""

    def callback(ctx: click.Context, _param: click.Parameter, requested: bool) -> None:
        if not requested or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{text}")
        ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        is_eager=True,
        expose_value=False,
        callback=callback,
        help="Show usage examples and exit.",
    )


class SkelCommand(click.Command):
    """Command accepting ``examples=`` text for its ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples is not None:
            self.params.append(examples_option(examples))


class SkelGroup(click.Group):
    """Group whose subcommands are SkelCommands by default."""

    command_class = SkelCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples is not None:
            self.params.append(examples_option(examples))
