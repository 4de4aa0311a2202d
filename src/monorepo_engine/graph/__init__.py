"""Graph module — dependency graph, cycle detection, run order."""

from monorepo_engine.graph.dependency_graph import (
    GraphReport,
    build_graph,
    check_graph,
    find_cycles,
    validate_graph,
)
from monorepo_engine.graph.run_order import collect_predecessor_closure, find_run_order

__all__ = [
    "GraphReport",
    "build_graph",
    "check_graph",
    "find_cycles",
    "validate_graph",
    "collect_predecessor_closure",
    "find_run_order",
]
