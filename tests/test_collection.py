"""Tests for the collection module."""

import pytest

from monorepo_engine.collection.index import Entity, EntityIndex
from monorepo_engine.collection.resolver import resolve_ref_set, resolve_selection
from monorepo_engine.errors import (
    AmbiguousReferenceError,
    ItemCollisionsError,
    UnknownReferenceError,
)


def _tests_index():
    return EntityIndex([
        {"id": "frontend:test", "name": "test"},
        {"id": "api:test", "name": "test"},
        {"id": "bus:test", "name": "test"},
        {"id": "api:lint", "name": "lint"},
    ])


class TestEntityIndex:
    def test_round_trip_by_id(self, index, entities):
        assert len(index) == len(entities)
        for item in entities:
            assert index.matches(index.id_of(item)) is item

    def test_keeps_collection_order(self, index, entities):
        assert index.all == entities

    def test_works_with_objects(self):
        idx = EntityIndex([Entity("a", "alpha"), Entity("b", "beta", ("a",))])
        assert idx.matches("beta").id == "b"
        assert idx.deps_of(idx.get("b")) == ["a"]
        assert idx.deps_of(idx.get("a")) == []

    def test_custom_fields(self):
        idx = EntityIndex(
            [{"key": "x", "label": "ex", "needs": ["y"]}, {"key": "y", "label": "why"}],
            id_field="key", dep_field="needs", name_field="label",
        )
        assert "x" in idx
        assert idx.matches("why")["key"] == "y"
        assert idx.deps_of(idx.get("x")) == ["y"]

    def test_missing_deps_field_is_empty(self):
        idx = EntityIndex([{"id": "a", "name": "a"}])
        assert idx.deps_of(idx.get("a")) == []

    def test_duplicate_id_reports_both_names(self):
        with pytest.raises(ItemCollisionsError) as exc_info:
            EntityIndex([
                {"id": "1", "name": "foo"},
                {"id": "2", "name": "bar"},
                {"id": "1", "name": "baz"},
            ])
        message = str(exc_info.value)
        assert "foo" in message
        assert "baz" in message
        assert exc_info.value.code == "ITEM_COLLISIONS"

    def test_all_duplicates_are_aggregated(self):
        with pytest.raises(ItemCollisionsError) as exc_info:
            EntityIndex([
                {"id": "1", "name": "foo"},
                {"id": "1", "name": "baz"},
                {"id": "2", "name": "bar"},
                {"id": "2", "name": "qux"},
            ])
        text = "\n".join(exc_info.value.collisions)
        assert "Duplicate id values (2)" in text
        assert 'id "1"' in text
        assert 'id "2"' in text

    def test_id_name_collision_allowed_by_default(self):
        idx = EntityIndex([{"id": "web", "name": "site"}, {"id": "x", "name": "web"}])
        # id wins over name
        assert idx.matches("web")["id"] == "web"

    def test_strict_mode_rejects_id_name_collision(self):
        with pytest.raises(ItemCollisionsError) as exc_info:
            EntityIndex(
                [{"id": "web", "name": "site"}, {"id": "x", "name": "web"}],
                forbid_id_name_collision=True,
            )
        assert "id↔name collisions (1)" in "\n".join(exc_info.value.collisions)

    def test_strict_mode_name_then_id(self):
        with pytest.raises(ItemCollisionsError):
            EntityIndex(
                [{"id": "x", "name": "web"}, {"id": "web", "name": "site"}],
                forbid_id_name_collision=True,
            )

    def test_strict_mode_allows_id_equal_to_own_name(self):
        idx = EntityIndex([{"id": "a", "name": "a"}], forbid_id_name_collision=True)
        assert idx.matches("a")["id"] == "a"


class TestMatches:
    def test_unique_name(self):
        idx = _tests_index()
        assert idx.matches("lint")["id"] == "api:lint"

    def test_unique_name_multiple(self):
        idx = _tests_index()
        assert [t["id"] for t in idx.matches("lint", multiple=True)] == ["api:lint"]

    def test_unknown(self):
        with pytest.raises(UnknownReferenceError) as exc_info:
            _tests_index().matches("deploy")
        assert exc_info.value.ref == "deploy"

    def test_ambiguous_lists_every_candidate(self):
        with pytest.raises(AmbiguousReferenceError) as exc_info:
            _tests_index().matches("test")
        assert exc_info.value.matches == ["frontend:test", "api:test", "bus:test"]

    def test_id_short_circuits_name(self):
        idx = EntityIndex([{"id": "test", "name": "a"}, {"id": "b", "name": "test"}])
        assert idx.matches("test")["name"] == "a"
        assert len(idx.matches("test", multiple=True)) == 1


class TestResolveRefSet:
    def test_error_policy_raises_on_ambiguity(self):
        with pytest.raises(AmbiguousReferenceError) as exc_info:
            resolve_ref_set(_tests_index(), "test", "error")
        assert set(exc_info.value.matches) == {"frontend:test", "api:test", "bus:test"}

    def test_run_all_expands(self):
        assert resolve_ref_set(_tests_index(), "test", "runAll") == [
            "frontend:test", "api:test", "bus:test",
        ]

    def test_error_policy_single(self):
        assert resolve_ref_set(_tests_index(), "api:test", "error") == ["api:test"]

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            resolve_ref_set(_tests_index(), "lint", "sometimes")

    def test_selection_is_deduplicated(self):
        ids = resolve_selection(_tests_index(), ["api:test", "test"], "runAll")
        assert ids == ["api:test", "frontend:test", "bus:test"]
