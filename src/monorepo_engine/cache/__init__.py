"""Cache module — store, sentinel files and rebuild decisions."""

from monorepo_engine.cache.decisions import BuildDecision, plan_rebuilds
from monorepo_engine.cache.sentinel import (
    Sentinel,
    SentinelCache,
    commit_files,
    file_fingerprint,
    sentinel_path,
)
from monorepo_engine.cache.store import Store

__all__ = [
    "BuildDecision",
    "plan_rebuilds",
    "Sentinel",
    "SentinelCache",
    "commit_files",
    "file_fingerprint",
    "sentinel_path",
    "Store",
]
