"""Rich Console factory and theme for skel output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract.  In non-TTY environments (tests, pipes) Rich
disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SKEL_THEME = Theme(
    {
        "skel.ok": "bold green",
        "skel.error": "bold red",
        "skel.warning": "bold yellow",
        "skel.op": "bold cyan",
        "skel.key": "dim",
        "skel.path": "blue",
        "skel.task": "bold magenta",
        "skel.kind.file": "green",
        "skel.kind.template": "yellow",
        "skel.span": "bold red",
    }
)

_KIND_STYLES: dict[str, str] = {
    "file": "skel.kind.file",
    "template": "skel.kind.template",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Return a themed Console writing into an in-memory buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps table layout stable in tests).
    """
    return Console(
        file=StringIO(),
        theme=SKEL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Return everything printed so far to a buffered Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a content kind."""
    return _KIND_STYLES.get(kind, "")
