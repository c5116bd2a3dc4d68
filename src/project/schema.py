# src/project/schema.py

from dataclasses import dataclass
from typing import Any


DEFAULT_PLATFORM = "NeoForge"
DEFAULT_MINECRAFT_VERSION = "1.21.1"
DEFAULT_KUBEJS_VERSION = "2101.7.1-build.181"


@dataclass(frozen=True)
class ProjectEntry:
    """
    One committed recipe.

    - entry_id: short unique id assigned at commit time
    - adapter_id: id of the adapter that compiles `payload`
    - payload: deep copy of the typed payload, recipe_id already namespaced
    - label: display label (the adapter title at commit time)
    """
    entry_id: str
    adapter_id: str
    payload: Any
    label: str


@dataclass(frozen=True)
class ProjectMeta:
    """Version info printed in the generated script header."""
    platform: str = DEFAULT_PLATFORM
    minecraft_version: str = DEFAULT_MINECRAFT_VERSION
    kubejs_version: str = DEFAULT_KUBEJS_VERSION
