"""Compute the run order for a selection of items."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from typing import Any

import networkx as nx

from monorepo_engine.collection.index import EntityIndex
from monorepo_engine.collection.resolver import DEFAULT_POLICY, resolve_selection
from monorepo_engine.errors import EmptySelectionError
from monorepo_engine.graph.dependency_graph import build_graph, check_graph

logger = logging.getLogger(__name__)


def collect_predecessor_closure(graph: nx.DiGraph, seeds: Iterable[str]) -> set[str]:
    """Collect the seeds plus everything they transitively depend on.

    Breadth-first walk over the graph's edges in reverse.
    """
    seen: set[str] = set()
    queue: deque[str] = deque()
    for seed in seeds:
        if seed not in seen:
            seen.add(seed)
            queue.append(seed)

    while queue:
        current = queue.popleft()
        for pred in graph.predecessors(current):
            if pred not in seen:
                seen.add(pred)
                queue.append(pred)

    return seen


def topological_ids(graph: nx.DiGraph) -> list[str]:
    """Deterministic topological order, ties broken by collection order."""
    return list(nx.lexicographical_topological_sort(
        graph, key=lambda node: graph.nodes[node].get("position", 0),
    ))


def find_run_order(
    selection: list[str],
    index: EntityIndex,
    policy: str = DEFAULT_POLICY,
) -> list[Any]:
    """Order the selected items and all their dependencies.

    Steps:
    1. Build the full dependency graph and reject any cycle
    2. Resolve the selection references to a seed set of ids
    3. Collect the transitive predecessor closure of the seeds
    4. Restrict the graph to that closure
    5. Sort it topologically, breaking ties by collection order

    Args:
        selection: References (ids or names) to run.
        index: Indexed entities.
        policy: Ambiguity policy, applied to the selection and to every
            dependency list.

    Returns:
        Items from the index, each one after all of its dependencies.

    Raises:
        CircularDependencyError: The graph has at least one cycle.
        EmptySelectionError: The selection resolved to no item.
        UnknownReferenceError / AmbiguousReferenceError: From resolution.
    """
    graph = build_graph(index, policy)
    check_graph(graph)

    seeds = resolve_selection(index, selection, policy)
    if not seeds:
        raise EmptySelectionError()

    closure = collect_predecessor_closure(graph, seeds)
    sub = graph.subgraph(closure)
    ordered = topological_ids(sub)

    logger.debug(
        "Run order: %d selected, %d in closure", len(seeds), len(ordered),
    )
    return [index.by_id[item_id] for item_id in ordered]
