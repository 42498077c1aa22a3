"""Layer merging — combine the project layer over the skeleton layer.

Precedence is two explicit, ordered map overlays:

- variables: skeleton bindings, then project bindings (project wins)
- tasks: skeleton tasks, then project tasks (project wins, whole task)

Neither overlay merges deeply: a project task replaces the skeleton task of
the same name with all of its steps, and a project variable replaces the
skeleton value outright.  Content only ever comes from the skeleton layer.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from skel.domain.content import Content
from skel.domain.task import Task
from skel.infrastructure.kdl import Scalar
from skel.services.layers import ProjectConfig, SkeletonConfig
from skel.services.resolver import calculate

logger = logging.getLogger(__name__)


def _frozen[K, V](mapping: Mapping[K, V] | None = None) -> Mapping[K, V]:
    return MappingProxyType(dict(mapping or {}))


def overlay[K, V](base: Mapping[K, V], override: Mapping[K, V]) -> dict[K, V]:
    """Return *base* with every key of *override* replacing or extending it."""
    merged = dict(base)
    merged.update(override)
    return merged


@dataclass(frozen=True)
class Skeleton:
    """The merged result of both layers, immutable once built.

    Attributes:
        project: Root of the project the skeleton is applied to.
        skeleton: Location of the skeleton layer.
        content: The skeleton's content table, unmodified.
        variables: Skeleton variables overlaid with project variables.
        tasks: Skeleton tasks overlaid with project tasks.
    """

    project: Path = field(default_factory=Path)
    skeleton: Path = field(default_factory=Path)
    content: Mapping[str, Content] = field(default_factory=_frozen)
    variables: Mapping[str, Scalar] = field(default_factory=_frozen)
    tasks: Mapping[str, Task] = field(default_factory=_frozen)

    @classmethod
    def from_config_file(cls, config_file: Path) -> Skeleton:
        """Load the project layer at *config_file*, then its skeleton, and merge."""
        project_config = ProjectConfig.read_from(config_file)
        skeleton_config = SkeletonConfig.read_from(project_config.skeleton_file)
        return merge_layers(skeleton_config, project_config)

    def calculate(self) -> list[Content]:
        """Content entries in dependency-respecting application order."""
        return calculate(self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": str(self.project),
            "skeleton": str(self.skeleton),
            "content": {key: entry.to_dict() for key, entry in self.content.items()},
            "variables": dict(self.variables),
            "tasks": {name: task.to_dict() for name, task in self.tasks.items()},
        }


def merge_layers(skeleton_config: SkeletonConfig, project_config: ProjectConfig) -> Skeleton:
    """Combine *project_config* over *skeleton_config*."""
    overridden = sorted(project_config.tasks.keys() & skeleton_config.tasks.keys())
    if overridden:
        logger.debug("Project layer replaces skeleton tasks: %s", ", ".join(overridden))

    return Skeleton(
        project=project_config.root,
        skeleton=project_config.skeleton,
        content=_frozen(skeleton_config.content),
        variables=_frozen(overlay(skeleton_config.variables, project_config.variables)),
        tasks=_frozen(overlay(skeleton_config.tasks, project_config.tasks)),
    )
