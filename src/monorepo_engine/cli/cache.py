"""Build cache CLI commands."""

import argparse

from monorepo_engine.cli.common import load_index, policy_of, print_error, resolve_root
from monorepo_engine.errors import EngineError
from monorepo_engine.paths import current_flavor, store_dir


def _store(args: argparse.Namespace):
    from monorepo_engine.cache.store import Store

    return Store(store_dir(resolve_root(args)))


def _is_valid_flavor(flavor: str) -> bool:
    """A flavor names one directory under the store, nothing else."""
    return bool(flavor) and flavor not in (".", "..") and "/" not in flavor and "\\" not in flavor


def cmd_cache_status(args: argparse.Namespace) -> int:
    from monorepo_engine.cache.decisions import plan_rebuilds
    from monorepo_engine.cache.sentinel import SentinelCache, file_fingerprint
    from monorepo_engine.graph.run_order import find_run_order
    from monorepo_engine.prerequisites.files import FilePrerequisite

    root = resolve_root(args)
    store = _store(args)
    flavor = args.flavor or current_flavor()
    policy = policy_of(args)
    if not _is_valid_flavor(flavor):
        print(f"ERROR invalid flavor: '{flavor}'")
        return 1

    def cache_for(item: dict) -> SentinelCache:
        return SentinelCache(store, flavor, item["component"], item["name"])

    def fingerprint_for(item: dict):
        prerequisites = [FilePrerequisite(path=p) for p in item.get("prerequisites", [])]
        return file_fingerprint(prerequisites, root / item.get("path", item["component"]))

    try:
        index = load_index(args)
    except EngineError as e:
        return print_error(e)
    except FileNotFoundError as e:
        print(f"ERROR manifest not found: {e.filename}")
        return 1

    try:
        selection = args.refs or [index.id_of(t) for t in index]
        ordered = find_run_order(selection, index, policy)
        decisions = plan_rebuilds(
            ordered, index, cache_for, fingerprint_for,
            force=args.force, policy=policy,
        )
    except EngineError as e:
        return print_error(e)
    except FileNotFoundError as e:
        print(f"ERROR missing prerequisite: {e.filename}")
        return 1

    print(f"\n  Build cache ({flavor})")
    print(f"  {'─' * 60}")
    for decision in decisions:
        status = "BUILD" if decision.must_build else "SKIP "
        print(f"  {status} {decision.entity_id:<40} {decision.reason}")
        if decision.payload and decision.payload.get("changed"):
            for path in decision.payload["changed"]:
                print(f"          {path}")

    to_build = sum(1 for d in decisions if d.must_build)
    print(f"\n  {to_build} to build, {len(decisions) - to_build} up to date")
    return 0


def cmd_cache_clear(args: argparse.Namespace) -> int:
    store = _store(args)
    if args.flavor:
        if not _is_valid_flavor(args.flavor):
            print(f"ERROR invalid flavor: '{args.flavor}'")
            return 1
        removed = store.remove(f"sentinels/flavors/{args.flavor}")
        print(f"  {'Cleared' if removed else 'Nothing to clear for'} flavor '{args.flavor}'")
    else:
        store.trash()
        print(f"  Removed store {store.path}")
    return 0
