"""Shared test fixtures for monorepo-engine."""

from pathlib import Path

import pytest

from monorepo_engine.cache.store import Store
from monorepo_engine.collection.index import EntityIndex
from monorepo_engine.manifest.loader import load_entities

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def entities():
    return load_entities(FIXTURES / "monorepo.yaml")


@pytest.fixture
def index(entities):
    return EntityIndex(entities)


@pytest.fixture
def store(tmp_path):
    return Store(tmp_path / ".monorepo")
