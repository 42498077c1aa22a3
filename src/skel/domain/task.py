"""Task definitions — named, ordered lists of automation steps.

Tasks are only described here; running them belongs to a task runner.
Step references to other tasks are resolved by name at execution time,
so nothing in this module validates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SetEnv:
    """Set one or more environment variables for the following steps."""

    env: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "env", "env": dict(self.env)}


@dataclass(frozen=True)
class Exec:
    """Run an external command."""

    command: str
    args: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": "exec", "command": self.command, "args": list(self.args)}


@dataclass(frozen=True)
class InvokeTask:
    """Invoke another task by name."""

    task: str
    args: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": "task", "task": self.task, "args": list(self.args)}


type TaskStep = SetEnv | Exec | InvokeTask


@dataclass(frozen=True)
class Task:
    """A named sequence of steps, keyed by name within its layer."""

    name: str
    steps: tuple[TaskStep, ...] = ()

    def environment(self) -> dict[str, str]:
        """Fold every SetEnv step in order; later values win."""
        env: dict[str, str] = {}
        for step in self.steps:
            if isinstance(step, SetEnv):
                env.update(step.env)
        return env

    def invoked_tasks(self) -> list[str]:
        """Names of the tasks this task invokes, in step order."""
        return [step.task for step in self.steps if isinstance(step, InvokeTask)]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "steps": [step.to_dict() for step in self.steps]}
