"""Tests for project config path resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from skel.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    normalize_path,
    resolve_config_path,
)


class TestNormalizePath:
    def test_folds_dot_segments(self) -> None:
        assert normalize_path(Path("/a/b"), Path("./c/../d")) == Path("/a/b/d")

    def test_parent_segments(self) -> None:
        assert normalize_path(Path("/a/b"), Path("../c")) == Path("/a/c")

    def test_absolute_path_replaces_base(self) -> None:
        assert normalize_path(Path("/a"), Path("/x/./y")) == Path("/x/y")


class TestResolveConfigPath:
    def test_default_is_cwd_config(self, tmp_path: Path) -> None:
        assert resolve_config_path(cwd=tmp_path) == tmp_path / CONFIG_FILENAME

    def test_uses_process_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_config_path() == Path.cwd() / CONFIG_FILENAME

    def test_relative_file(self, tmp_path: Path) -> None:
        assert resolve_config_path("sub/../custom.kdl", cwd=tmp_path) == tmp_path / "custom.kdl"

    def test_directory_gets_config_filename(self, tmp_path: Path) -> None:
        (tmp_path / "project").mkdir()
        result = resolve_config_path("project", cwd=tmp_path)
        assert result == tmp_path / "project" / CONFIG_FILENAME

    def test_absolute_path(self, tmp_path: Path) -> None:
        target = tmp_path / "x.kdl"
        assert resolve_config_path(str(target), cwd=Path("/elsewhere")) == target

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, "from-env.kdl")
        assert resolve_config_path(cwd=tmp_path) == tmp_path / "from-env.kdl"

    def test_explicit_beats_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, "from-env.kdl")
        assert resolve_config_path("explicit.kdl", cwd=tmp_path) == tmp_path / "explicit.kdl"

    def test_empty_env_var_ignored(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, "")
        assert resolve_config_path(cwd=tmp_path) == tmp_path / CONFIG_FILENAME
