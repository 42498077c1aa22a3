"""Human-readable rendering of skeleton results.

:func:`render_result` picks a renderer by ``result.op`` (show, plan,
tasks, task) and falls back to plain key-value lines for anything else.
Failed results get a diagnostic with the offending config line and a
caret under the reported column.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from skel.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from skel.services.result import ServiceResult

type _Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* through a buffered Rich console and return the text."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """One item per line for scripting: plan sources or task names."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "plan":
        return "\n".join(step["source"] for step in result.data.get("steps", []))
    if result.op == "tasks":
        return "\n".join(item["name"] for item in result.data.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="skel.ok"), Text(f"  {result.op}", style="skel.op"))


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print ``key: value``, compacting containers to one-line JSON."""
    if isinstance(value, dict | list):
        value = json.dumps(value, separators=(",", ":"))
    console.print(Text(f"  {key}: ", style="skel.key"), Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        console.print(Text(f"    {key}: {value}"))


def _content_table(steps: list[dict[str, Any]], *, numbered: bool) -> Table:
    """Build a Rich Table of content entries."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    if numbered:
        table.add_column("#", justify="right", style="dim")
    table.add_column("Source", style="skel.path", no_wrap=True)
    table.add_column("Destination", style="skel.path", no_wrap=True)
    table.add_column("Kind")
    table.add_column("Depends On")

    for index, step in enumerate(steps, start=1):
        kind = str(step.get("kind", ""))
        row: list[Any] = [
            str(step.get("source", "")),
            str(step.get("destination", "")),
            Text(kind, style=style_for_kind(kind)),
            ", ".join(step.get("dependencies", [])),
        ]
        if numbered:
            row.insert(0, str(index))
        table.add_row(*row)
    return table


def _format_step(step: dict[str, Any]) -> str:
    match step.get("type"):
        case "env":
            pairs = " ".join(f"{k}={v}" for k, v in step.get("env", {}).items())
            return f"env {pairs}".rstrip()
        case "exec":
            return " ".join(["exec", step["command"], *step.get("args", [])])
        case "task":
            return " ".join(["task", step["task"], *step.get("args", [])])
        case _:
            return str(step)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="skel.error"),
        Text(f"  {result.op}", style="skel.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if err is None:
        return

    detail = err.detail
    if "line" in detail and "snippet" in detail:
        line, column = detail["line"], detail.get("column", 1)
        gutter = f"  {line} | "
        console.print(Text(f"  --> line {line}, column {column}", style="dim"))
        console.print(Text(gutter, style="dim"), Text(str(detail["snippet"])), sep="")
        marker = " " * (len(gutter) + column - 1) + "^"
        label = detail.get("label")
        console.print(Text(f"{marker} {label}" if label else marker, style="skel.span"))
    if "help" in detail:
        console.print(Text("  help: ", style="skel.warning"), Text(str(detail["help"])), sep="")

    if verbose:
        shown = {"line", "column", "snippet", "label", "help"}
        extra = {k: v for k, v in detail.items() if k not in shown}
        if extra:
            console.print(Text("  detail:", style="dim"))
            for key, value in extra.items():
                console.print(Text(f"    {key}: {value}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the merged skeleton: paths, content, variables, tasks."""
    data = result.data
    _status_line(console, result)
    _field(console, "project", data.get("project", ""), style="skel.path")
    _field(console, "skeleton", data.get("skeleton", ""), style="skel.path")

    content = list(data.get("content", {}).values())
    console.print()
    console.print(Text(f"content ({len(content)})", style="bold"))
    if content:
        console.print(_content_table(content, numbered=False))

    variables = data.get("variables", {})
    console.print()
    console.print(Text(f"variables ({len(variables)})", style="bold"))
    for name in sorted(variables):
        _field(console, name, json.dumps(variables[name]))

    tasks = data.get("tasks", {})
    console.print()
    console.print(Text(f"tasks ({len(tasks)})", style="bold"))
    for name in sorted(tasks):
        console.print(Text(f"  {name}", style="skel.task"))
        for step in tasks[name].get("steps", []):
            console.print(Text(f"    {_format_step(step)}"))

    if verbose:
        _render_meta(console, result)


def _render_plan(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the ordered content plan as a numbered table."""
    data = result.data
    _status_line(console, result)
    _field(console, "project", data.get("project", ""), style="skel.path")
    _field(console, "skeleton", data.get("skeleton", ""), style="skel.path")
    steps = data.get("steps", [])
    if steps:
        console.print()
        console.print(_content_table(steps, numbered=True))
    console.print(f"\n{data.get('count', len(steps))} entries")
    if verbose:
        _render_meta(console, result)


def _render_task_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Task", style="skel.task", no_wrap=True)
    table.add_column("Steps", justify="right")
    for item in items:
        table.add_row(str(item.get("name", "")), str(item.get("steps", 0)))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} tasks")


def _render_task(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "name", data.get("name", ""), style="skel.task")
    console.print(Text("  steps:", style="skel.key"))
    for index, step in enumerate(data.get("steps", []), start=1):
        console.print(Text(f"    {index}. {_format_step(step)}"))
    environment = data.get("environment", {})
    if environment:
        console.print(Text("  environment:", style="skel.key"))
        for key, value in environment.items():
            console.print(Text(f"    {key}={value}"))
    for missing in data.get("missing", []):
        console.print(Text(f"  warning: invokes undefined task {missing!r}", style="skel.warning"))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, _Renderer] = {
    "show": _render_show,
    "plan": _render_plan,
    "tasks": _render_task_list,
    "task": _render_task,
}
