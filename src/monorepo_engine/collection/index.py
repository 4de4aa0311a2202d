"""Index a collection of entities by id and by name.

Entities are the components, resources and tasks of the monorepo. The
index only needs three fields from each of them (id, name, deps), so it
works on plain dicts (what the manifest loader produces) as well as on
any object exposing those attributes.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from monorepo_engine.errors import AmbiguousReferenceError, ItemCollisionsError, UnknownReferenceError


@dataclass(frozen=True)
class Entity:
    """Minimal buildable unit."""

    id: str
    name: str
    deps: tuple[str, ...] = field(default_factory=tuple)


def _field(entity: Any, key: str, default: Any = None) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(key, default)
    return getattr(entity, key, default)


class EntityIndex:
    """Read-only id/name lookup over a snapshot of entities.

    Args:
        entities: Items to index. Iterated exactly once.
        id_field: Field holding the unique id.
        dep_field: Field holding the list of dependency references.
        name_field: Field holding the (non-unique) name.
        forbid_id_name_collision: Also reject values used as an id by one
            item and as a name by another.

    Raises:
        ItemCollisionsError: With every collision found, not just the first.
    """

    def __init__(
        self,
        entities: Iterable[Any],
        id_field: str = "id",
        dep_field: str = "deps",
        name_field: str = "name",
        forbid_id_name_collision: bool = False,
    ):
        self.id_field = id_field
        self.dep_field = dep_field
        self.name_field = name_field
        self.forbid_id_name_collision = forbid_id_name_collision

        self._items: list[Any] = []
        self.by_id: dict[str, Any] = {}
        self.by_name: dict[str, list[Any]] = {}

        dup_reports: list[str] = []
        collisions: list[str] = []
        check_collisions = forbid_id_name_collision and id_field != name_field

        for item in entities:
            item_id = self.id_of(item)
            name = self.name_of(item)

            if item_id in self.by_id:
                first = self.by_id[item_id]
                dup_reports.append(
                    f'id "{item_id}" used by "{self.name_of(first)}" and "{name}"'
                )
            else:
                self.by_id[item_id] = item

            if check_collisions:
                if item_id in self.by_name:
                    owners = ", ".join(self.id_of(o) for o in self.by_name[item_id])
                    collisions.append(
                        f'value "{item_id}" is an id of "{name}" and also a name '
                        f"of item(s) with id(s): [{owners}]"
                    )
                # An item whose id equals its own name is not ambiguous
                id_owner = self.by_id.get(name)
                if id_owner is not None and id_owner is not item:
                    collisions.append(
                        f'value "{name}" is a name of "{item_id}" and also an id '
                        f'of "{self.name_of(id_owner)}"'
                    )

            self.by_name.setdefault(name, []).append(item)
            self._items.append(item)

        if dup_reports or collisions:
            parts: list[str] = []
            if dup_reports:
                parts.append(
                    f"Duplicate {id_field} values ({len(dup_reports)}):\n"
                    + "\n".join(dup_reports)
                )
            if collisions:
                parts.append(
                    f"id↔name collisions ({len(collisions)}):\n"
                    + "\n".join(collisions)
                )
            raise ItemCollisionsError("Collision between items", parts)

    @property
    def all(self) -> list[Any]:
        """All items in their original order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.by_id

    def get(self, item_id: str) -> Any | None:
        return self.by_id.get(item_id)

    def id_of(self, item: Any) -> str:
        return _field(item, self.id_field)

    def name_of(self, item: Any) -> str:
        return _field(item, self.name_field)

    def deps_of(self, item: Any) -> list[str]:
        return list(_field(item, self.dep_field) or [])

    def matches(self, ref: str, multiple: bool = False) -> Any:
        """Look up a reference.

        An exact id always wins. Otherwise the reference is treated as a
        name, which may be shared by several items.

        Args:
            ref: Id or name.
            multiple: Return a list with every name match instead of
                failing on ambiguity.

        Returns:
            The matching item, or a list of items when ``multiple`` is set.

        Raises:
            UnknownReferenceError: Nothing matches.
            AmbiguousReferenceError: Several names match and ``multiple``
                is not set.
        """
        id_hit = self.by_id.get(ref)
        if id_hit is not None:
            return [id_hit] if multiple else id_hit

        name_hits = self.by_name.get(ref, [])
        if not name_hits:
            raise UnknownReferenceError(ref)

        if multiple:
            return list(name_hits)

        if len(name_hits) > 1:
            raise AmbiguousReferenceError(ref, [self.id_of(t) for t in name_hits])

        return name_hits[0]
