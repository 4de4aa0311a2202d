"""Turn an ordered plan into per-unit skip/rebuild decisions.

A unit whose cache is valid is still rebuilt when one of its
dependencies is rebuilt in the same plan. Nothing here runs a build.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from monorepo_engine.cache.sentinel import Fingerprint, SentinelCache
from monorepo_engine.collection.index import EntityIndex
from monorepo_engine.collection.resolver import DEFAULT_POLICY, resolve_ref_set

logger = logging.getLogger(__name__)


@dataclass
class BuildDecision:
    entity_id: str
    cache_hit: bool
    forced: bool = False
    payload: dict[str, Any] | None = None
    reason: str = ""
    forced_by: list[str] = field(default_factory=list)

    @property
    def must_build(self) -> bool:
        return self.forced or not self.cache_hit


def plan_rebuilds(
    ordered: list[Any],
    index: EntityIndex,
    cache_for: Callable[[Any], SentinelCache],
    fingerprint_for: Callable[[Any], Fingerprint],
    force: bool = False,
    policy: str = DEFAULT_POLICY,
) -> list[BuildDecision]:
    """Decide, for each unit of a run order, whether it must be rebuilt.

    Args:
        ordered: Output of find_run_order.
        index: Index the plan was computed from.
        cache_for: Returns the sentinel cache of an item.
        fingerprint_for: Returns the fingerprint computation of an item.
        force: Bypass the cache for every unit.
        policy: Ambiguity policy used to resolve dependency references.

    Returns:
        One decision per item, in plan order.
    """
    decisions: list[BuildDecision] = []
    rebuilt: set[str] = set()

    for item in ordered:
        item_id = index.id_of(item)
        payload = cache_for(item).must_build(fingerprint_for(item))
        decision = BuildDecision(
            entity_id=item_id,
            cache_hit=payload is None,
            payload=payload,
        )

        if payload is not None:
            changed = payload.get("changed") or []
            decision.reason = (
                f"{len(changed)} prerequisite(s) changed" if changed else "cache miss"
            )
        else:
            decision.reason = "cache hit"

        if force:
            decision.forced = True
            decision.reason = "forced"
        else:
            deps = set()
            for ref in index.deps_of(item):
                deps.update(resolve_ref_set(index, ref, policy))
            forced_by = sorted(deps & rebuilt)
            if forced_by and decision.cache_hit:
                decision.forced = True
                decision.forced_by = forced_by
                decision.reason = f"dependency rebuilt: {', '.join(forced_by)}"

        if decision.must_build:
            rebuilt.add(item_id)
        logger.debug("%s: %s", item_id, decision.reason)
        decisions.append(decision)

    return decisions
