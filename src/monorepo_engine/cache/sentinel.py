"""Sentinel files — remember the last successful build of each unit.

A sentinel lives at ``sentinels/flavors/<flavor>/<component>/<name>.built``
inside the store and holds the JSON payload produced when deciding to
build. Its own modification time marks when that build completed.

Typical use, per unit of an ordered plan::

    cache = SentinelCache(store, flavor, component, name)
    payload = cache.must_build(file_fingerprint(prerequisites, root))
    if payload is not None:
        ...  # run the build
        cache.commit(payload)  # only if the build succeeded
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from monorepo_engine.cache.store import Store
from monorepo_engine.prerequisites.files import FilePrerequisite, diff, meta, now_ms

logger = logging.getLogger(__name__)

# Receives the previous sentinel (or None) and returns a payload to build,
# or None when the unit is up to date.
Fingerprint = Callable[["Sentinel | None"], "dict[str, Any] | None"]


@dataclass
class Sentinel:
    """A persisted sentinel file."""

    data: Any
    mtime: int


def sentinel_path(flavor: str, component: str, name: str) -> str:
    """Store-relative path of a unit's sentinel file."""
    return f"sentinels/flavors/{flavor}/{component}/{name}.built"


class SentinelCache:
    """Skip/rebuild decisions for one buildable unit.

    Callers must not run two commits for the same unit concurrently.
    """

    def __init__(self, store: Store, flavor: str, component: str, name: str):
        self.store = store
        self.flavor = flavor
        self.component = component
        self.name = name

    @property
    def path(self) -> str:
        return sentinel_path(self.flavor, self.component, self.name)

    def read(self) -> Sentinel | None:
        """Load the sentinel, or None if the unit was never built."""
        stats = self.store.stat(self.path)
        if stats is None:
            return None

        raw = self.store.read_text(self.path)
        try:
            data = json.loads(raw) if raw else None
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable sentinel %s: %s", self.path, e)
            return None

        return Sentinel(data=data, mtime=stats.st_mtime_ns // 1_000_000)

    def must_build(self, compute: Fingerprint) -> dict[str, Any] | None:
        """Decide whether the unit has to be rebuilt.

        Args:
            compute: Unit-specific fingerprint computation.

        Returns:
            The payload to persist after a successful build (cache miss),
            or None to skip the build (cache hit).
        """
        previous = self.read()
        payload = compute(previous)

        if previous is None:
            logger.debug("No sentinel for %s/%s, must build", self.component, self.name)
            return payload if payload is not None else {"mtime": now_ms()}

        if payload is None:
            logger.debug("Cache hit for %s/%s", self.component, self.name)
            return None

        # Payloads without an mtime cannot be compared, so they always build
        if "mtime" not in payload or previous.mtime < payload["mtime"]:
            logger.debug("Cache miss for %s/%s", self.component, self.name)
            return payload

        logger.debug("Cache hit for %s/%s (sentinel is newer)", self.component, self.name)
        return None

    def commit(self, payload: dict[str, Any]) -> Path:
        """Persist the payload. Call only after the build succeeded."""
        target = self.store.write_text(self.path, json.dumps(payload))
        logger.debug("Stored sentinel %s", target)
        return target

    def clear(self) -> bool:
        return self.store.remove(self.path)


def file_fingerprint(
    prerequisites: list[FilePrerequisite],
    root: Path | str | None = None,
) -> Fingerprint:
    """Fingerprint computation for units backed by files.

    The stored fingerprint is the "post" meta captured when the last
    build was committed (``data["meta"]``), falling back to the sentinel's
    mtime for sentinels written without it.
    """

    def compute(previous: Sentinel | None) -> dict[str, Any] | None:
        pre = meta(prerequisites, "pre", root)
        if previous is None:
            return {"mtime": int(pre), "changed": [p.path for p in prerequisites]}

        data = previous.data if isinstance(previous.data, dict) else {}
        stored = str(data.get("meta", previous.mtime))
        changed = diff(prerequisites, stored, pre, root)
        if changed is None:
            return None
        return {"mtime": int(pre), "changed": [p.path for p in changed]}

    return compute


def commit_files(cache: SentinelCache, payload: dict[str, Any]) -> Path:
    """Commit a file-backed payload together with its "post" fingerprint."""
    return cache.commit({**payload, "meta": meta([], "post")})
