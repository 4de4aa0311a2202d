"""Read a monorepo manifest and flatten it into entities.

Manifest structure::

    components:
      - name: base
        path: base            # optional, defaults to the component name
        resources:
          - name: image
            prerequisites: [Dockerfile, requirements.txt]
        tasks:
          - name: test
            deps: [base:image]

Each resource or task becomes an entity dict with the id
``<component>:<name>``.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from monorepo_engine.paths import manifest_path

KINDS = {"resources": "resource", "tasks": "task"}


def read_manifest(path: Path | str | None = None) -> dict:
    """Read and parse a manifest file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If the document is not a mapping.
    """
    manifest_file = Path(path) if path else manifest_path()
    with open(manifest_file) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"manifest at {manifest_file} is not a YAML mapping")

    return data


def get_components(manifest: dict) -> list[dict]:
    """Extract component entries from a manifest."""
    return manifest.get("components", []) or []


def entity_id(component: str, name: str) -> str:
    return f"{component}:{name}"


def flatten_entities(manifest: dict, kind: str | None = None) -> list[dict]:
    """Turn every resource/task of every component into an entity dict.

    Args:
        manifest: Parsed manifest.
        kind: Only keep "resource" or "task" entities.

    Returns:
        Entity dicts in manifest order.
    """
    entities: list[dict] = []
    for component in get_components(manifest):
        comp_name = component.get("name")
        if not comp_name:
            raise ValueError(f"component without a name: {component!r}")
        comp_path = component.get("path", comp_name)

        for section, section_kind in KINDS.items():
            if kind and kind != section_kind:
                continue
            for entry in component.get(section, []) or []:
                name = entry.get("name")
                if not name:
                    raise ValueError(f"{comp_name}: {section_kind} without a name")
                entities.append({
                    "id": entry.get("id", entity_id(comp_name, name)),
                    "name": name,
                    "component": comp_name,
                    "path": comp_path,
                    "kind": section_kind,
                    "deps": list(entry.get("deps", []) or []),
                    "prerequisites": list(entry.get("prerequisites", []) or []),
                })

    return entities


def load_entities(path: Path | str | None = None, kind: str | None = None) -> list[dict]:
    """Read a manifest and return its flattened entities."""
    return flatten_entities(read_manifest(path), kind)
