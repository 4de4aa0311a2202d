"""Helpers shared by CLI commands."""

import argparse
from pathlib import Path

from monorepo_engine.collection.index import EntityIndex
from monorepo_engine.errors import EngineError
from monorepo_engine.manifest.loader import load_entities
from monorepo_engine.paths import monorepo_root


def resolve_root(args: argparse.Namespace) -> Path:
    """Resolve the monorepo root from args or environment."""
    raw = getattr(args, "root", None)
    if raw:
        return Path(raw).expanduser().resolve()
    return monorepo_root()


def policy_of(args: argparse.Namespace) -> str:
    return "runAll" if getattr(args, "run_all", False) else "error"


def load_index(args: argparse.Namespace) -> EntityIndex:
    manifest = args.manifest or resolve_root(args) / "monorepo.yaml"
    entities = load_entities(manifest, kind=getattr(args, "kind", None))
    return EntityIndex(entities, forbid_id_name_collision=args.strict)


def print_error(err: EngineError) -> int:
    print(f"ERROR [{err.code}] {err.message}")
    for line in err.details():
        for part in line.split("\n"):
            print(f"  {part}")
    return 1
