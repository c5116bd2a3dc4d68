# src/project/loader.py
"""
YAML storage for recipe projects.

Document layout:

    namespace: shadoukube
    meta:
      platform: NeoForge
      minecraft_version: "1.21.1"
      kubejs_version: "2101.7.1-build.181"
    entries:
      - entry_id: 3f2a9c1e
        adapter_id: vanilla.shapeless
        label: "Vanilla: Shapeless Crafting"
        payload:
          __type: vanilla.shapeless
          result: {id: minecraft:bread, count: 1, nbt: null}
          ...

Payloads are stored tagged with their adapter id and are coerced back through
that adapter on load, so hand-edited files are repaired rather than rejected.
Entries whose adapter id is unknown are dropped with a warning.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from adapters.base import tag_payload
from adapters.registry import get_adapter
from adapters.schema import RecipeAdapter
from ingredients.normalize import DEFAULT_NAMESPACE

from .project import RecipeProject
from .schema import ProjectEntry, ProjectMeta

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def scaffold_payload(adapter: RecipeAdapter) -> Dict[str, Any]:
    """Tagged storage form of an adapter's default payload."""
    return tag_payload(adapter.id, adapter.default())


def entry_to_dict(entry: ProjectEntry) -> Dict[str, Any]:
    return {
        "entry_id": entry.entry_id,
        "adapter_id": entry.adapter_id,
        "label": entry.label,
        "payload": tag_payload(entry.adapter_id, entry.payload),
    }


def project_to_dict(project: RecipeProject) -> Dict[str, Any]:
    return {
        "namespace": project.namespace,
        "meta": {
            "platform": project.meta.platform,
            "minecraft_version": project.meta.minecraft_version,
            "kubejs_version": project.meta.kubejs_version,
        },
        "entries": [entry_to_dict(e) for e in project.entries],
    }


def save_project(project: RecipeProject, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(project_to_dict(project), f, sort_keys=False, allow_unicode=True)
    logger.info("Saved %d entries to %s", len(project), path)


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------

def _meta_from_dict(raw: Any) -> ProjectMeta:
    defaults = ProjectMeta()
    if not isinstance(raw, Mapping):
        return defaults
    return ProjectMeta(
        platform=str(raw.get("platform", defaults.platform)),
        minecraft_version=str(raw.get("minecraft_version", defaults.minecraft_version)),
        kubejs_version=str(raw.get("kubejs_version", defaults.kubejs_version)),
    )


def entry_from_dict(raw: Mapping[str, Any]) -> Optional[ProjectEntry]:
    """Rebuild one entry; None when its adapter is unknown."""
    adapter_id = str(raw.get("adapter_id", ""))
    adapter = get_adapter(adapter_id)
    if adapter is None:
        logger.warning("Dropping stored entry %r: unknown adapter %r", raw.get("entry_id"), adapter_id)
        return None
    return ProjectEntry(
        entry_id=str(raw.get("entry_id", "")),
        adapter_id=adapter.id,
        payload=adapter.coerce(raw.get("payload")),
        label=str(raw.get("label") or adapter.title),
    )


def project_from_dict(data: Mapping[str, Any]) -> RecipeProject:
    raw_entries = data.get("entries") or []
    if not isinstance(raw_entries, list):
        raise ValueError("Project 'entries' must be a list.")

    entries: List[ProjectEntry] = []
    for raw in raw_entries:
        if not isinstance(raw, Mapping):
            logger.warning("Dropping stored entry: expected a mapping, got %s", type(raw).__name__)
            continue
        entry = entry_from_dict(raw)
        if entry is not None:
            entries.append(entry)

    namespace = data.get("namespace")
    return RecipeProject(
        namespace=namespace if isinstance(namespace, str) and namespace.strip() else DEFAULT_NAMESPACE,
        meta=_meta_from_dict(data.get("meta")),
        entries=entries,
    )


def load_project(path: Path) -> RecipeProject:
    """
    Load a project YAML file.

    Raises FileNotFoundError if the file does not exist and ValueError when
    the document is not a mapping.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Project file {path} must be a mapping at top level.")
    project = project_from_dict(data)
    logger.info("Loaded %d entries from %s", len(project), path)
    return project


__all__ = [
    "scaffold_payload",
    "entry_to_dict",
    "project_to_dict",
    "save_project",
    "entry_from_dict",
    "project_from_dict",
    "load_project",
]
