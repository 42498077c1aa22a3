"""Tests for parsing task nodes into Task values."""

from __future__ import annotations

import pytest

from skel.domain.errors import ConfigError, ConfigErrorKind
from skel.domain.task import Exec, InvokeTask, SetEnv, Task
from skel.infrastructure.kdl import Locator, parse_document
from skel.services.tasks import parse_task, parse_tasks


def _parse(text: str) -> dict[str, Task]:
    return parse_tasks(parse_document(text).nodes, locator=Locator(text))


class TestParseTasks:
    def test_deploy_task(self) -> None:
        tasks = _parse(
            'task "deploy" {\n'
            '    env REGION="us-east-1"\n'
            '    exec "terraform" "apply"\n'
            '    task "notify" "#ops"\n'
            "}\n"
        )
        assert tasks == {
            "deploy": Task(
                name="deploy",
                steps=(
                    SetEnv({"REGION": "us-east-1"}),
                    Exec("terraform", ("apply",)),
                    InvokeTask("notify", ("#ops",)),
                ),
            )
        }

    def test_deploy_task_on_one_line(self) -> None:
        tasks = _parse('task "deploy" { env region="us"; exec "ssh" "host"; task "cleanup"; }\n')
        assert tasks["deploy"].steps == (
            SetEnv({"region": "us"}),
            Exec("ssh", ("host",)),
            InvokeTask("cleanup"),
        )

    def test_steps_keep_document_order(self) -> None:
        tasks = _parse(
            'task "build" {\n'
            '    env A="1"\n'
            '    exec "make" "all"\n'
            '    env A="2" B="3"\n'
            '    task "lint"\n'
            "}\n"
        )
        build = tasks["build"]
        assert build.steps == (
            SetEnv({"A": "1"}),
            Exec("make", ("all",)),
            SetEnv({"A": "2", "B": "3"}),
            InvokeTask("lint"),
        )
        assert build.environment() == {"A": "2", "B": "3"}

    def test_non_string_values_become_text(self) -> None:
        tasks = _parse('task "t" {\n    env N=3\n    exec "sleep" 5\n}\n')
        assert tasks["t"].steps == (SetEnv({"N": "3"}), Exec("sleep", ("5",)))

    def test_task_without_body_has_no_steps(self) -> None:
        assert _parse('task "noop"\n') == {"noop": Task(name="noop")}

    def test_unknown_steps_skipped(self) -> None:
        tasks = _parse('task "t" {\n    shell "ls"\n    exec "ls"\n}\n')
        assert tasks["t"].steps == (Exec("ls"),)

    def test_later_definition_wins(self) -> None:
        tasks = _parse('task "t" {\n    exec "a"\n}\ntask "t" {\n    exec "b"\n}\n')
        assert tasks["t"].steps == (Exec("b"),)

    def test_multiple_tasks(self) -> None:
        tasks = _parse('task "a"\ntask "b" {\n    task "a"\n}\n')
        assert list(tasks) == ["a", "b"]
        assert tasks["b"].invoked_tasks() == ["a"]

    def test_other_nodes_ignored(self) -> None:
        assert _parse('root "."\nvariables {\n    x "1"\n}\n') == {}


class TestParseTaskErrors:
    def test_missing_task_name(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _parse("task {\n    exec \"ls\"\n}\n")
        assert exc_info.value.kind is ConfigErrorKind.MISSING_ARGUMENT
        assert exc_info.value.location() == (1, 5)

    def test_non_string_task_name(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _parse("task 7 {\n}\n")
        assert exc_info.value.kind is ConfigErrorKind.INVALID_STRING
        assert exc_info.value.span == (5, 1)

    def test_exec_without_command(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _parse('task "build" {\n    exec\n}\n')
        assert exc_info.value.kind is ConfigErrorKind.MISSING_ARGUMENT
        assert exc_info.value.location() == (2, 9)

    def test_invoke_without_name_in_second_task(self) -> None:
        text = 'task "a" {\n    task "b"\n}\ntask "c" {\n    task\n}\n'
        with pytest.raises(ConfigError) as exc_info:
            _parse(text)
        assert exc_info.value.location() == (5, 9)


class TestParseTask:
    def test_parse_task_directly(self) -> None:
        text = 'exec "echo" "hi"\n'
        task = parse_task("greet", list(parse_document(text).nodes), locator=Locator(text))
        assert task == Task(name="greet", steps=(Exec("echo", ("hi",)),))
