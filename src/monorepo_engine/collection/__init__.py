"""Collection module — entity index and reference resolution."""

from monorepo_engine.collection.index import Entity, EntityIndex
from monorepo_engine.collection.resolver import (
    AMBIGUITY_POLICIES,
    DEFAULT_POLICY,
    resolve_ref_set,
    resolve_selection,
)

__all__ = [
    "Entity",
    "EntityIndex",
    "AMBIGUITY_POLICIES",
    "DEFAULT_POLICY",
    "resolve_ref_set",
    "resolve_selection",
]
