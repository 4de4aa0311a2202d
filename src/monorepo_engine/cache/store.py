"""On-disk store for engine state (sentinel files, ...).

For now it is a hidden directory at the monorepo root. Every path handed
to the store is relative to that directory and normalised so it cannot
point outside of it.
"""

from __future__ import annotations

import logging
import os
import posixpath
import shutil
import tempfile
from pathlib import Path

from monorepo_engine.paths import store_dir

logger = logging.getLogger(__name__)


class Store:
    """A directory where the engine can keep files between runs."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else store_dir()

    def __repr__(self) -> str:
        return f"Store({str(self.path)!r})"

    def init(self) -> None:
        """Create the store directory if it does not exist yet."""
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Unable to create the store at {self.path}: {e}") from e

    def join(self, relpath: str) -> Path:
        """Absolute path of a store entry."""
        normalized = posixpath.normpath(posixpath.join("/", relpath)).lstrip("/")
        return self.path / normalized

    def mkdirp(self, relpath: str) -> Path:
        directory = self.join(relpath)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def stat(self, relpath: str) -> os.stat_result | None:
        """Stat an entry, or None if it does not exist."""
        try:
            return self.join(relpath).stat()
        except FileNotFoundError:
            return None

    def read_text(self, relpath: str) -> str:
        return self.join(relpath).read_text()

    def write_text(self, relpath: str, data: str) -> Path:
        """Write an entry atomically, creating parent directories as needed.

        The data goes to a temporary file next to the target which then
        replaces it, so readers never see a partially written entry.
        """
        directory = self.mkdirp(posixpath.dirname(relpath))
        target = self.join(relpath)
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                f.write(data)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return target

    def remove(self, relpath: str) -> bool:
        """Remove a file or a whole subtree. Returns False if absent."""
        target = self.join(relpath)
        if target.is_dir():
            shutil.rmtree(target)
            return True
        if target.exists():
            target.unlink()
            return True
        return False

    def trash(self) -> None:
        """Delete the whole store."""
        if self.path.exists():
            logger.debug("Removing store %s", self.path)
            shutil.rmtree(self.path)
