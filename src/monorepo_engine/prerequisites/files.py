"""File prerequisites — modification-time fingerprints.

A fingerprint ("meta") is a decimal string of milliseconds since the
epoch. Before a build, the fingerprint is the most recent mtime across
the declared files; after a build, it is the wall clock at completion.
A later "pre" fingerprint greater than the stored "post" one means at
least one file changed since the last successful build.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path

from monorepo_engine.errors import InvalidModeError

META_MODES = ("pre", "post")


@dataclass(frozen=True)
class FilePrerequisite:
    path: str
    type: str = "file"


def _resolve(prerequisite: FilePrerequisite, root: Path | str | None) -> Path:
    path = Path(prerequisite.path)
    if root is not None and not path.is_absolute():
        return Path(root) / path
    return path


def mtime_ms(prerequisite: FilePrerequisite, root: Path | str | None = None) -> int:
    """Modification time of a prerequisite, in milliseconds."""
    return os.stat(_resolve(prerequisite, root)).st_mtime_ns // 1_000_000


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def meta(
    prerequisites: list[FilePrerequisite],
    mode: str,
    root: Path | str | None = None,
) -> str:
    """Compute the fingerprint of a set of prerequisites.

    Args:
        prerequisites: Files to consider.
        mode: "pre" (before deciding whether to build) or "post" (after a
            successful build).
        root: Directory relative paths are resolved against.

    Returns:
        Decimal timestamp string; "0" for an empty set in "pre" mode.

    Raises:
        InvalidModeError: Unknown mode.
        FileNotFoundError: A prerequisite does not exist.
    """
    if mode == "post":
        return str(now_ms())
    if mode == "pre":
        latest = 0
        for prerequisite in prerequisites:
            latest = max(latest, mtime_ms(prerequisite, root))
        return str(latest)
    raise InvalidModeError(mode, META_MODES)


def diff(
    prerequisites: list[FilePrerequisite],
    previous: str,
    current: str | None = None,
    root: Path | str | None = None,
) -> list[FilePrerequisite] | None:
    """List prerequisites modified after the previous fingerprint.

    Args:
        prerequisites: Files to check.
        previous: Fingerprint stored at the last successful build.
        current: Fresh "pre" fingerprint. Unused by the mtime comparison,
            accepted so every fingerprint flavour shares one signature.
        root: Directory relative paths are resolved against.

    Returns:
        Changed prerequisites, or None when nothing changed.
    """
    threshold = int(previous)
    changed = [p for p in prerequisites if mtime_ms(p, root) > threshold]
    return changed or None
