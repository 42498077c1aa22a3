"""Dependency resolution — order content so dependencies are applied first.

The order is part of the observable contract, not an implementation
detail: among entries that are ready at the same time, emission follows
the collated parent-then-name order, so output is identical across runs
and platforms no matter how the content table was built.

Algorithm (iterative removal):

1. Sort every key into the collated base order.
2. Give each key a live copy of its dependency list, plus reverse edges.
3. Scan the remaining keys in base order.  A key with no outstanding
   dependencies is emitted at once, dropped from *remaining*, and removed
   from its dependents' outstanding lists, so a later key may become ready
   during the same scan.
4. Repeat until nothing remains.  A scan that emits nothing means a cycle.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import networkx as nx

from skel.domain.collation import sort_paths
from skel.domain.content import Content
from skel.domain.errors import CycleDetectedError, UnknownDependencyError

logger = logging.getLogger(__name__)


def _find_cycle(remaining: list[str], outstanding: Mapping[str, list[str]]) -> list[str]:
    """Return one concrete cycle among the unresolved keys."""
    graph: nx.DiGraph = nx.DiGraph()
    graph.add_nodes_from(remaining)
    for key in remaining:
        for dependency in outstanding[key]:
            graph.add_edge(key, dependency)
    try:
        edges = nx.find_cycle(graph, source=remaining)
    except nx.NetworkXNoCycle:
        return []
    return [source for source, _target in edges]


def calculate(content: Mapping[str, Content]) -> list[Content]:
    """Return every entry of *content* once, each after its dependencies.

    Raises:
        UnknownDependencyError: An entry depends on a key not in *content*.
        CycleDetectedError: Dependencies form a cycle (including self-loops).
    """
    for key, entry in content.items():
        for dependency in entry.dependencies:
            if dependency not in content:
                raise UnknownDependencyError(key, dependency)

    keys = sort_paths(content)
    outstanding: dict[str, list[str]] = {key: list(content[key].dependencies) for key in keys}
    dependents: dict[str, list[str]] = {key: [] for key in keys}
    for key in keys:
        for dependency in content[key].dependencies:
            dependents[dependency].append(key)

    result: list[Content] = []
    remaining = list(keys)
    while remaining:
        emitted = 0
        for key in list(remaining):
            if outstanding[key]:
                continue
            emitted += 1
            result.append(content[key])
            remaining.remove(key)
            for dependent in dependents[key]:
                outstanding[dependent] = [dep for dep in outstanding[dependent] if dep != key]

        if emitted == 0:
            cycle = _find_cycle(remaining, outstanding)
            logger.debug("Dependency cycle among %s", remaining)
            raise CycleDetectedError(remaining, cycle)

    return result
