"""Monorepo path resolution.

Resolves canonical paths used by the engine. Uses environment variables
when available, falls back to conventional defaults.

Environment variables:
    MONOREPO_ROOT — monorepo root (default: current directory)
    MONOREPO_STORE_DIR — engine store (default: <root>/.monorepo)
    MONOREPO_MANIFEST — manifest file (default: <root>/monorepo.yaml)
    MONOREPO_FLAVOR — build flavor used to namespace sentinels (default: default)
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_STORE_DIRNAME = ".monorepo"
DEFAULT_MANIFEST_NAME = "monorepo.yaml"
DEFAULT_FLAVOR = "default"


def monorepo_root() -> Path:
    """Return the monorepo root directory."""
    return Path(os.environ.get("MONOREPO_ROOT", str(Path.cwd())))


def store_dir(root: Path | str | None = None) -> Path:
    """Return the directory holding sentinels and other engine state."""
    env = os.environ.get("MONOREPO_STORE_DIR")
    if env:
        return Path(env)
    base = Path(root) if root else monorepo_root()
    return base / DEFAULT_STORE_DIRNAME


def manifest_path(root: Path | str | None = None) -> Path:
    """Return the path to the monorepo manifest."""
    env = os.environ.get("MONOREPO_MANIFEST")
    if env:
        return Path(env)
    base = Path(root) if root else monorepo_root()
    return base / DEFAULT_MANIFEST_NAME


def current_flavor() -> str:
    """Return the active build flavor."""
    return os.environ.get("MONOREPO_FLAVOR", DEFAULT_FLAVOR)
