"""Shared pytest fixtures for skel tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

type ProjectFactory = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SKEL_* environment out of the tests."""
    for name in ("SKEL_CONFIG", "SKEL_VERBOSE", "SKEL_QUIET", "SKEL_JSON_OUTPUT", "SKEL_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Factory laying out a project with its default ``.skeleton`` layer.

    Layout under ``tmp_path``::

        .skeleton.kdl                  (project layer, if *project* given)
        .skeleton/skeleton.kdl         (skeleton layer, if *skeleton* given)
        .skeleton/content/<files>      (one file per entry in *files*)

    Returns the path of the project config file, whether or not it exists.
    """

    def factory(
        *,
        project: str | None = None,
        skeleton: str | None = None,
        files: Iterable[str] = (),
    ) -> Path:
        skeleton_dir = tmp_path / ".skeleton"
        content_dir = skeleton_dir / "content"
        content_dir.mkdir(parents=True, exist_ok=True)
        for name in files:
            target = content_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"{name}\n", encoding="utf-8")
        if skeleton is not None:
            (skeleton_dir / "skeleton.kdl").write_text(skeleton, encoding="utf-8")
        config_file = tmp_path / ".skeleton.kdl"
        if project is not None:
            config_file.write_text(project, encoding="utf-8")
        return config_file

    return factory
