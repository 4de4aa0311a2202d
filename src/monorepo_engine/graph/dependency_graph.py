"""Dependency graph construction and cycle detection.

Edges point from a dependency to its dependent ("must run before"), so a
topological order of the graph is a valid run order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import networkx as nx

from monorepo_engine.collection.index import EntityIndex
from monorepo_engine.collection.resolver import DEFAULT_POLICY, resolve_ref_set
from monorepo_engine.errors import CircularDependencyError

logger = logging.getLogger(__name__)


@dataclass
class GraphReport:
    """Result of a dependency graph check."""

    total_nodes: int = 0
    total_edges: int = 0
    cycles: list[list[str]] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return len(self.cycles) == 0

    @property
    def violations(self) -> list[str]:
        return [f"Cycle: {' -> '.join(c)}" for c in self.cycles]

    def summary(self) -> str:
        lines = [
            f"Dependency Graph: {self.total_nodes} items, {self.total_edges} edges",
        ]
        if self.cycles:
            lines.append(f"CYCLES ({len(self.cycles)}):")
            for v in self.violations:
                lines.append(f"  {v}")
        else:
            lines.append("No cycles found.")
        return "\n".join(lines)


def build_graph(index: EntityIndex, policy: str = DEFAULT_POLICY) -> nx.DiGraph:
    """Build the dependency graph of every item in the index.

    Each raw reference in an item's dependency list is resolved with the
    given policy; one edge is added per resolved id.

    Args:
        index: Indexed entities.
        policy: Ambiguity policy applied to dependency references.

    Returns:
        Directed graph whose nodes are item ids. Each node carries its
        ``position`` in the collection, used to break ordering ties.
    """
    graph = nx.DiGraph()
    for position, item in enumerate(index):
        item_id = index.id_of(item)
        # Duplicate ids never reach here, the index rejects them
        graph.add_node(item_id, position=position)

    for item in index:
        to_id = index.id_of(item)
        for ref in index.deps_of(item):
            for from_id in resolve_ref_set(index, ref, policy):
                graph.add_edge(from_id, to_id)

    logger.debug(
        "Built dependency graph: %d nodes, %d edges",
        graph.number_of_nodes(), graph.number_of_edges(),
    )
    return graph


def _position(graph: nx.DiGraph, node: str) -> int:
    return graph.nodes[node].get("position", 0)


def find_cycles(graph: nx.DiGraph) -> list[list[str]]:
    """Return every elementary cycle in the graph.

    Each cycle is a list of ids that starts and ends with the same id,
    rotated to start at the earliest item in collection order. Cycles are
    sorted by the collection positions of their members so the result is
    stable across runs.
    """
    cycles: list[list[str]] = []
    for cycle in nx.simple_cycles(graph):
        start = min(range(len(cycle)), key=lambda i: _position(graph, cycle[i]))
        rotated = cycle[start:] + cycle[:start]
        cycles.append(rotated + [rotated[0]])

    cycles.sort(key=lambda c: [_position(graph, n) for n in c])
    return cycles


def check_graph(graph: nx.DiGraph) -> None:
    """Raise CircularDependencyError if the graph has any cycle."""
    cycles = find_cycles(graph)
    if cycles:
        logger.debug("Found %d dependency cycle(s)", len(cycles))
        raise CircularDependencyError(cycles)


def validate_graph(index: EntityIndex, policy: str = DEFAULT_POLICY) -> GraphReport:
    """Build the graph and report on it without raising on cycles."""
    graph = build_graph(index, policy)
    return GraphReport(
        total_nodes=graph.number_of_nodes(),
        total_edges=graph.number_of_edges(),
        cycles=find_cycles(graph),
    )
