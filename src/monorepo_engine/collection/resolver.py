"""Resolve references to entity ids under an ambiguity policy."""

from __future__ import annotations

from typing import Literal

from monorepo_engine.collection.index import EntityIndex

AmbiguityPolicy = Literal["error", "runAll"]

# "error" fails fast on ambiguous names; "runAll" expands them to every match
AMBIGUITY_POLICIES = ("error", "runAll")
DEFAULT_POLICY: AmbiguityPolicy = "error"


def resolve_ref_set(index: EntityIndex, ref: str, policy: str = DEFAULT_POLICY) -> list[str]:
    """Resolve one reference to the ids it designates.

    Args:
        index: Entity index to search.
        ref: Id or name.
        policy: "error" returns exactly one id, "runAll" every matching id.

    Returns:
        List of resolved ids, in collection order.
    """
    if policy == "runAll":
        return [index.id_of(t) for t in index.matches(ref, multiple=True)]
    if policy == "error":
        return [index.id_of(index.matches(ref))]
    raise ValueError(
        f"Unknown ambiguity policy '{policy}' (valid: {', '.join(AMBIGUITY_POLICIES)})"
    )


def resolve_selection(
    index: EntityIndex,
    selection: list[str],
    policy: str = DEFAULT_POLICY,
) -> list[str]:
    """Resolve a list of references into a deduplicated list of ids."""
    seen: dict[str, None] = {}
    for ref in selection:
        for item_id in resolve_ref_set(index, ref, policy):
            seen.setdefault(item_id, None)
    return list(seen)
