"""Manifest module — read monorepo.yaml and flatten it into entities."""

from monorepo_engine.manifest.loader import flatten_entities, load_entities, read_manifest

__all__ = ["read_manifest", "flatten_entities", "load_entities"]
