"""SkeletonService — load, merge and plan a skeleton for the CLI.

Each operation loads both layers from the configured project file, merges
them, and packages the outcome as a ServiceResult.  Any SkelError raised
along the way becomes a failed result carrying the error's code and
structured detail.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from skel.domain.errors import SkelError
from skel.services.layers import ProjectConfig, SkeletonConfig
from skel.services.merge import Skeleton, merge_layers
from skel.services.result import ServiceError, ServiceResult

logger = structlog.get_logger(__name__)


class SkeletonService:
    """Operations over the merged skeleton for one project config file."""

    def __init__(self, config_file: Path) -> None:
        self._config_file = config_file

    def _load(self, warnings: list[str]) -> Skeleton:
        project_config = ProjectConfig.read_from(self._config_file)
        if project_config.is_default:
            warnings.append(f"No project config at {self._config_file}; using defaults")

        skeleton_file = project_config.skeleton_file
        skeleton_config = SkeletonConfig.read_from(skeleton_file)
        if skeleton_config.is_default:
            warnings.append(f"No skeleton config at {skeleton_file}; using defaults")

        return merge_layers(skeleton_config, project_config)

    def _run(self, op: str, build: Callable[[Skeleton], dict[str, Any]]) -> ServiceResult:
        """Load the skeleton, call ``build(skeleton)`` and wrap the outcome."""
        started = time.perf_counter()
        log = logger.bind(op=op, config=str(self._config_file))
        warnings: list[str] = []
        try:
            skeleton = self._load(warnings)
            data = build(skeleton)
        except SkelError as exc:
            log.debug("operation failed", code=exc.code, error=str(exc))
            return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc))
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log.debug("operation finished", duration_ms=duration_ms)
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={"config": str(self._config_file), "duration_ms": duration_ms},
        )

    def show(self) -> ServiceResult:
        """The full merged skeleton: paths, content, variables and tasks."""
        return self._run("show", lambda skeleton: skeleton.to_dict())

    def plan(self) -> ServiceResult:
        """Content in the order it would be applied to the project."""

        def build(skeleton: Skeleton) -> dict[str, Any]:
            steps = [entry.to_dict() for entry in skeleton.calculate()]
            return {
                "project": str(skeleton.project),
                "skeleton": str(skeleton.skeleton),
                "steps": steps,
                "count": len(steps),
            }

        return self._run("plan", build)

    def tasks(self, name: str | None = None) -> ServiceResult:
        """List merged tasks, or describe the single task called *name*."""

        def build(skeleton: Skeleton) -> dict[str, Any]:
            if name is None:
                items = [
                    {"name": task.name, "steps": len(task.steps)}
                    for task in sorted(skeleton.tasks.values(), key=lambda t: t.name)
                ]
                return {"items": items, "count": len(items)}

            task = skeleton.tasks.get(name)
            if task is None:
                raise SkelError(f"No task named {name!r}")
            missing = [ref for ref in task.invoked_tasks() if ref not in skeleton.tasks]
            return {**task.to_dict(), "environment": task.environment(), "missing": missing}

        return self._run("task" if name is not None else "tasks", build)
