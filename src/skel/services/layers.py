"""Layer loading — read one configuration layer into a typed config.

Two layers exist:

- The *skeleton* layer (``<skeleton>/skeleton.kdl``) owns content, shared
  tasks and default variables.  Its content root is the sibling
  ``content/`` directory, scanned for files before explicit ``content``
  nodes refine them.
- The *project* layer (``.skeleton.kdl`` by default) points at the project
  root and the skeleton to use, and overrides tasks and variables.

A missing configuration file is not an error; the layer is loaded from an
empty document and flagged ``is_default``.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from skel.domain.content import Content, ContentKind
from skel.domain.errors import (
    ConfigError,
    InvalidContentKindError,
    Span,
    UnknownDependencyError,
)
from skel.infrastructure.filesystem import read_text_with_default, read_tree
from skel.infrastructure.kdl import (
    Locator,
    Scalar,
    find_node,
    first_string_arg,
    native,
    nodes_named,
    parse_document,
    variables_from_nodes,
)
from skel.services.resolver import calculate
from skel.services.tasks import parse_tasks

if TYPE_CHECKING:
    import kdl

    from skel.domain.task import Task

logger = logging.getLogger(__name__)

SKELETON_FILENAME = "skeleton.kdl"
CONTENT_DIRNAME = "content"
DEFAULT_SKELETON_DIRNAME = ".skeleton"


def _load(path: Path) -> tuple[kdl.Document, Locator, bool]:
    text, is_default = read_text_with_default(path)
    document = parse_document(text, path=path)
    return document, Locator(text), is_default


# ---------------------------------------------------------------------------
# Content nodes
# ---------------------------------------------------------------------------


def _string_arg(
    node: kdl.Node,
    *,
    locator: Locator,
    occurrence: int,
    start: int,
    depth: int,
) -> str:
    """First positional argument of *node*, which must be a string."""
    if not node.args:
        span = locator.argument(node.name, 0, occurrence=occurrence, start=start, depth=depth)
        raise ConfigError.missing_argument(locator.text, span)
    value = native(node.args[0])
    if not isinstance(value, str):
        span = locator.argument(node.name, 0, occurrence=occurrence, start=start, depth=depth)
        raise ConfigError.invalid_string(locator.text, span)
    return value


def _apply_content_node(
    entry: Content,
    node: kdl.Node,
    *,
    locator: Locator,
    start: int,
    dependency_spans: dict[tuple[str, str], Span | None],
) -> Content:
    """Return *entry* refined by the children of its ``content`` node.

    Each dependency added here records the span of its argument in
    *dependency_spans*, keyed by ``(source, dependency)``.
    """
    destination = entry.destination
    kind = entry.kind
    dependencies = list(entry.dependencies)
    seen: dict[str, int] = {}

    for child in node.nodes:
        occurrence = seen.get(child.name, 0)
        seen[child.name] = occurrence + 1
        match child.name:
            case "destination":
                value = _string_arg(
                    child, locator=locator, occurrence=occurrence, start=start, depth=1
                )
                destination = Path(value)
            case "kind":
                value = _string_arg(
                    child, locator=locator, occurrence=occurrence, start=start, depth=1
                )
                try:
                    kind = ContentKind.parse(value)
                except InvalidContentKindError:
                    span = locator.argument("kind", 0, occurrence=occurrence, start=start, depth=1)
                    raise InvalidContentKindError(value, config=locator.text, span=span) from None
            case "depends_on":
                for index, arg in enumerate(child.args):
                    value = native(arg)
                    span = locator.argument(
                        "depends_on", index, occurrence=occurrence, start=start, depth=1
                    )
                    if not isinstance(value, str):
                        raise ConfigError.invalid_string(locator.text, span)
                    dependencies.append(value)
                    dependency_spans.setdefault((entry.key, value), span)
            case _:
                logger.debug("Ignoring unknown content child %r", child.name)

    return dataclasses.replace(
        entry,
        destination=destination,
        kind=kind,
        dependencies=tuple(dependencies),
    )


def _validate_dependencies(
    content: dict[str, Content],
    *,
    locator: Locator,
    dependency_spans: dict[tuple[str, str], Span | None],
) -> None:
    """Reject dependencies that name keys missing from the content table."""
    for key, entry in content.items():
        for dependency in entry.dependencies:
            if dependency in content:
                continue
            span = dependency_spans.get((key, dependency))
            raise UnknownDependencyError(key, dependency, config=locator.text, span=span)


def _build_content(
    document: kdl.Document,
    root: Path,
    *,
    locator: Locator,
) -> dict[str, Content]:
    """Scan *root* for content, then apply the document's ``content`` nodes."""
    content: dict[str, Content] = {}
    for source in read_tree(root):
        entry = Content.from_source(source)
        content[entry.key] = entry

    dependency_spans: dict[tuple[str, str], Span | None] = {}
    for occurrence, node in enumerate(nodes_named(document.nodes, "content")):
        source = _string_arg(node, locator=locator, occurrence=occurrence, start=0, depth=0)
        entry = content.get(source)
        if entry is None:
            span = locator.argument("content", 0, occurrence=occurrence)
            raise ConfigError.missing_source(locator.text, span)
        node_span = locator.node("content", occurrence=occurrence)
        start = node_span[0] if node_span else 0
        content[source] = _apply_content_node(
            entry, node, locator=locator, start=start, dependency_spans=dependency_spans
        )

    _validate_dependencies(content, locator=locator, dependency_spans=dependency_spans)
    return content


# ---------------------------------------------------------------------------
# Layer configs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SkeletonConfig:
    """The shared skeleton layer."""

    root: Path
    content: dict[str, Content] = field(default_factory=dict)
    tasks: dict[str, Task] = field(default_factory=dict)
    variables: dict[str, Scalar] = field(default_factory=dict)
    is_default: bool = False

    @classmethod
    def read_from(cls, path: Path) -> SkeletonConfig:
        """Load the skeleton layer from its ``skeleton.kdl`` at *path*."""
        document, locator, is_default = _load(path)
        root = path.parent / CONTENT_DIRNAME

        tasks = parse_tasks(document.nodes, locator=locator)
        content = _build_content(document, root, locator=locator)
        variables = variables_from_nodes(document.nodes, locator=locator)

        logger.debug(
            "Loaded skeleton layer %s (%d content, %d tasks, %d variables)",
            path,
            len(content),
            len(tasks),
            len(variables),
        )
        return cls(
            root=root,
            content=content,
            tasks=tasks,
            variables=variables,
            is_default=is_default,
        )

    def calculate(self) -> list[Content]:
        """Content entries in dependency-respecting application order."""
        return calculate(self.content)


@dataclass(frozen=True)
class ProjectConfig:
    """The per-project override layer.  It never defines content."""

    root: Path
    skeleton: Path
    tasks: dict[str, Task] = field(default_factory=dict)
    variables: dict[str, Scalar] = field(default_factory=dict)
    is_default: bool = False

    @property
    def content(self) -> dict[str, Content]:
        return {}

    @property
    def skeleton_file(self) -> Path:
        """Location of the skeleton layer's configuration file."""
        return self.skeleton / SKELETON_FILENAME

    @classmethod
    def read_from(cls, path: Path) -> ProjectConfig:
        """Load the project layer from the config file at *path*."""
        document, locator, is_default = _load(path)

        root = Path(
            first_string_arg(document.nodes, "root", lambda: str(path.parent), locator=locator)
        )
        skeleton = Path(
            first_string_arg(
                document.nodes,
                "skeleton",
                lambda: str(root / DEFAULT_SKELETON_DIRNAME),
                locator=locator,
            )
        )

        if find_node(document.nodes, "content") is not None:
            logger.debug("Ignoring content nodes in project layer %s", path)

        tasks = parse_tasks(document.nodes, locator=locator)
        variables = variables_from_nodes(document.nodes, locator=locator)

        logger.debug(
            "Loaded project layer %s (root=%s, skeleton=%s, default=%s)",
            path,
            root,
            skeleton,
            is_default,
        )
        return cls(
            root=root,
            skeleton=skeleton,
            tasks=tasks,
            variables=variables,
            is_default=is_default,
        )
