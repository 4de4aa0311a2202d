"""Discover file prerequisites from git."""

from __future__ import annotations

import subprocess
from pathlib import Path

from monorepo_engine.prerequisites.files import FilePrerequisite


def _run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    """Run a git command and return the result."""
    return subprocess.run(
        ["git"] + args,
        cwd=cwd,
        capture_output=True,
        text=True,
    )


def collect(path: Path | str) -> list[FilePrerequisite]:
    """List every tracked file under a directory.

    Args:
        path: Component directory inside a git work tree.

    Returns:
        One FilePrerequisite per tracked file, with paths relative to
        ``path``.

    Raises:
        RuntimeError: git failed (not a repository, git missing, ...).
    """
    directory = Path(path)
    result = _run_git(["ls-files", "."], directory)
    if result.returncode != 0:
        raise RuntimeError(
            f"git ls-files failed in {directory}: {result.stderr.strip()}"
        )

    return [
        FilePrerequisite(path=line.strip())
        for line in result.stdout.split("\n")
        if line.strip()
    ]
