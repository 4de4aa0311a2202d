"""Prerequisites module — fingerprint and diff the files a unit depends on."""

from monorepo_engine.prerequisites.files import FilePrerequisite, diff, meta
from monorepo_engine.prerequisites.git import collect

__all__ = ["FilePrerequisite", "meta", "diff", "collect"]
