"""Task parsing — turn ``task`` nodes of a layer document into Task values.

Each child node of a task body becomes exactly one step, in order:

- ``env name=value ...`` → SetEnv (named entries only)
- ``exec command arg ...`` → Exec (positional entries only)
- ``task name arg ...`` → InvokeTask (same shape as exec)

Unknown node names are skipped so newer step kinds don't break older
readers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skel.domain.errors import ConfigError
from skel.domain.task import Exec, InvokeTask, SetEnv, Task, TaskStep
from skel.infrastructure.kdl import Locator, native, nodes_named, to_text

if TYPE_CHECKING:
    import kdl

logger = logging.getLogger(__name__)


def _command_and_args(
    node: kdl.Node,
    *,
    locator: Locator,
    occurrence: int,
    start: int,
) -> tuple[str, tuple[str, ...]]:
    """Split a node's positional entries into ``(command, args)``."""
    if not node.args or not isinstance(native(node.args[0]), str):
        span = locator.argument(node.name, 0, occurrence=occurrence, start=start, depth=1)
        raise ConfigError.missing_argument(locator.text, span)
    command = native(node.args[0])
    return command, tuple(to_text(arg) for arg in node.args[1:])


def parse_task(
    name: str,
    nodes: list[kdl.Node],
    *,
    locator: Locator,
    start: int = 0,
) -> Task:
    """Build a Task named *name* from the child nodes of its body.

    *start* is the offset of the task node in the source text; it anchors
    span lookups for error reporting.
    """
    steps: list[TaskStep] = []
    seen: dict[str, int] = {}
    for node in nodes:
        occurrence = seen.get(node.name, 0)
        seen[node.name] = occurrence + 1
        match node.name:
            case "env":
                steps.append(SetEnv({key: to_text(value) for key, value in node.props.items()}))
            case "exec":
                command, args = _command_and_args(
                    node, locator=locator, occurrence=occurrence, start=start
                )
                steps.append(Exec(command, args))
            case "task":
                task_name, args = _command_and_args(
                    node, locator=locator, occurrence=occurrence, start=start
                )
                steps.append(InvokeTask(task_name, args))
            case _:
                logger.debug("Ignoring unknown step %r in task %r", node.name, name)
    return Task(name=name, steps=tuple(steps))


def parse_tasks(nodes: list[kdl.Node], *, locator: Locator) -> dict[str, Task]:
    """Parse every top-level ``task <name> { ... }`` node.

    A later task with the same name replaces an earlier one.
    """
    tasks: dict[str, Task] = {}
    for occurrence, node in enumerate(nodes_named(nodes, "task")):
        if not node.args:
            span = locator.argument("task", 0, occurrence=occurrence)
            raise ConfigError.missing_argument(locator.text, span)
        name = native(node.args[0])
        if not isinstance(name, str):
            span = locator.argument("task", 0, occurrence=occurrence)
            raise ConfigError.invalid_string(locator.text, span)

        node_span = locator.node("task", occurrence=occurrence)
        start = node_span[0] if node_span else 0
        if name in tasks:
            logger.debug("Task %r redefined, keeping the later definition", name)
        tasks[name] = parse_task(name, node.nodes, locator=locator, start=start)
    return tasks
