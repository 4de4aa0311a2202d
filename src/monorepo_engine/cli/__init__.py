"""Unified CLI for the monorepo engine.

Usage:
    monorepo plan <ref>... [--run-all]
    monorepo graph check [--run-all]
    monorepo graph show [--run-all]
    monorepo cache status [<ref>...] [--flavor F] [--force] [--run-all]
    monorepo cache clear [--flavor F]
"""

import argparse
import logging
import sys

from monorepo_engine.cli.cache import cmd_cache_clear, cmd_cache_status
from monorepo_engine.cli.graph import cmd_graph_check, cmd_graph_show
from monorepo_engine.cli.plan import cmd_plan


def _add_selection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--run-all", action="store_true",
        help="Expand ambiguous references to every match instead of failing",
    )
    parser.add_argument(
        "--kind", choices=["resource", "task"], default=None,
        help="Only consider resources or tasks",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monorepo",
        description="Resolve, order and cache monorepo builds",
    )
    parser.add_argument(
        "--manifest", default=None,
        help="Path to monorepo.yaml (default: <root>/monorepo.yaml)",
    )
    parser.add_argument(
        "--root", default=None,
        help="Monorepo root directory",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Reject values used both as an id and as a name",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # plan
    plan = sub.add_parser("plan", help="Show the run order for a selection")
    plan.add_argument("refs", nargs="+", help="Ids or names to run")
    _add_selection_args(plan)

    # graph
    graph = sub.add_parser("graph", help="Dependency graph operations")
    graph_sub = graph.add_subparsers(dest="subcommand")
    check = graph_sub.add_parser("check", help="Report every dependency cycle")
    _add_selection_args(check)
    show = graph_sub.add_parser("show", help="List dependency edges")
    _add_selection_args(show)

    # cache
    cache = sub.add_parser("cache", help="Build cache operations")
    cache_sub = cache.add_subparsers(dest="subcommand")
    status = cache_sub.add_parser(
        "status", help="Show which units must be rebuilt",
    )
    status.add_argument("refs", nargs="*", help="Ids or names (default: all)")
    status.add_argument("--flavor", default=None, help="Build flavor")
    status.add_argument(
        "--force", action="store_true",
        help="Bypass the cache for every unit",
    )
    _add_selection_args(status)

    clear = cache_sub.add_parser("clear", help="Remove sentinel files")
    clear.add_argument(
        "--flavor", default=None,
        help="Only clear this flavor (default: the whole store)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "plan":
        return cmd_plan(args)

    dispatch = {
        ("graph", "check"): cmd_graph_check,
        ("graph", "show"): cmd_graph_show,
        ("cache", "status"): cmd_cache_status,
        ("cache", "clear"): cmd_cache_clear,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        return handler(args)

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
