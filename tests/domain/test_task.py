"""Tests for task definitions and their steps."""

from __future__ import annotations

from skel.domain.task import Exec, InvokeTask, SetEnv, Task


class TestTask:
    def test_empty_task(self) -> None:
        task = Task(name="noop")
        assert task.steps == ()
        assert task.environment() == {}
        assert task.invoked_tasks() == []

    def test_environment_folds_in_order(self) -> None:
        task = Task(
            name="build",
            steps=(
                SetEnv({"A": "1"}),
                Exec("make"),
                SetEnv({"A": "2", "B": "3"}),
            ),
        )
        assert task.environment() == {"A": "2", "B": "3"}

    def test_invoked_tasks(self) -> None:
        task = Task(
            name="release",
            steps=(InvokeTask("build"), Exec("git", ("tag",)), InvokeTask("publish", ("--dry",))),
        )
        assert task.invoked_tasks() == ["build", "publish"]

    def test_steps_preserve_order(self) -> None:
        steps = (Exec("a"), Exec("b"), Exec("c"))
        assert Task(name="t", steps=steps).steps == steps


class TestStepSerialization:
    def test_set_env(self) -> None:
        assert SetEnv({"K": "v"}).to_dict() == {"type": "env", "env": {"K": "v"}}

    def test_exec(self) -> None:
        assert Exec("cargo", ("build", "--release")).to_dict() == {
            "type": "exec",
            "command": "cargo",
            "args": ["build", "--release"],
        }

    def test_invoke_task(self) -> None:
        assert InvokeTask("build").to_dict() == {"type": "task", "task": "build", "args": []}

    def test_task_to_dict(self) -> None:
        task = Task(name="t", steps=(Exec("ls"),))
        assert task.to_dict() == {
            "name": "t",
            "steps": [{"type": "exec", "command": "ls", "args": []}],
        }
