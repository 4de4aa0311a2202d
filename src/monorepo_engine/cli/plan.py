"""Plan CLI command."""

import argparse

from monorepo_engine.cli.common import load_index, policy_of, print_error
from monorepo_engine.errors import EngineError


def cmd_plan(args: argparse.Namespace) -> int:
    from monorepo_engine.graph.run_order import find_run_order

    try:
        index = load_index(args)
        ordered = find_run_order(args.refs, index, policy_of(args))
    except EngineError as e:
        return print_error(e)

    print(f"\n  Run order ({len(ordered)} item(s))")
    print(f"  {'─' * 40}")
    for position, item in enumerate(ordered, start=1):
        deps = index.deps_of(item)
        suffix = f"  <- {', '.join(deps)}" if deps else ""
        print(f"  {position:>3}. {index.id_of(item)}{suffix}")
    print()
    return 0
