"""Dependency graph CLI commands."""

import argparse

from monorepo_engine.cli.common import load_index, policy_of, print_error
from monorepo_engine.errors import EngineError


def cmd_graph_check(args: argparse.Namespace) -> int:
    from monorepo_engine.graph.dependency_graph import validate_graph

    try:
        index = load_index(args)
        result = validate_graph(index, policy_of(args))
    except EngineError as e:
        return print_error(e)

    print(result.summary())
    print(f"\n  Result: {'PASS' if result.passed else 'FAIL'}")
    return 0 if result.passed else 1


def cmd_graph_show(args: argparse.Namespace) -> int:
    from monorepo_engine.graph.dependency_graph import build_graph

    try:
        index = load_index(args)
        graph = build_graph(index, policy_of(args))
    except EngineError as e:
        return print_error(e)

    print(f"Dependency Graph: {graph.number_of_nodes()} items, {graph.number_of_edges()} edges")
    for src, tgt in sorted(graph.edges()):
        print(f"  {src} --> {tgt}")
    return 0
