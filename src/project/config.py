# src/project/config.py
"""
Builder configuration loader.

Reads config/builder.yaml:

    namespace: shadoukube
    platform: NeoForge            # NeoForge | Fabric | Forge
    minecraft_version: "1.21.1"
    kubejs_version: "2101.7.1-build.181"
    output_path: kubejs/server_scripts/recipes.js

Every key is optional; missing keys keep their defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ingredients.normalize import DEFAULT_NAMESPACE

from .schema import (
    DEFAULT_KUBEJS_VERSION,
    DEFAULT_MINECRAFT_VERSION,
    DEFAULT_PLATFORM,
    ProjectMeta,
)


# Default config directory; tests monkeypatch this to point at a temp dir.
CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"

CONFIG_FILE = "builder.yaml"

PLATFORMS = ("NeoForge", "Fabric", "Forge")
DEFAULT_OUTPUT_PATH = "kubejs/server_scripts/recipes.js"


@dataclass
class BuilderConfig:
    namespace: str = DEFAULT_NAMESPACE
    platform: str = DEFAULT_PLATFORM
    minecraft_version: str = DEFAULT_MINECRAFT_VERSION
    kubejs_version: str = DEFAULT_KUBEJS_VERSION
    output_path: str = DEFAULT_OUTPUT_PATH

    def meta(self) -> ProjectMeta:
        return ProjectMeta(
            platform=self.platform,
            minecraft_version=self.minecraft_version,
            kubejs_version=self.kubejs_version,
        )


def _load_yaml(path: Path) -> Dict[str, Any]:
    """
    Load a YAML file and return it as a dict.

    Raises FileNotFoundError if the file does not exist.
    """
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML config {path} must be a mapping at top level.")
    return data


def load_builder_config(path: Optional[Path] = None) -> BuilderConfig:
    """
    Load BuilderConfig from `path` (default CONFIG_DIR / builder.yaml).

    Raises:
        FileNotFoundError: config file missing
        ValueError: non-mapping document or unknown platform
    """
    path = Path(path) if path is not None else CONFIG_DIR / CONFIG_FILE
    data = _load_yaml(path)
    defaults = BuilderConfig()

    platform = str(data.get("platform", defaults.platform))
    if platform not in PLATFORMS:
        raise ValueError(f"Unknown platform {platform!r} in {path}; expected one of {', '.join(PLATFORMS)}")

    namespace = str(data.get("namespace", defaults.namespace)).strip().lower()
    if not namespace:
        raise ValueError(f"Empty namespace in {path}")

    return BuilderConfig(
        namespace=namespace,
        platform=platform,
        minecraft_version=str(data.get("minecraft_version", defaults.minecraft_version)),
        kubejs_version=str(data.get("kubejs_version", defaults.kubejs_version)),
        output_path=str(data.get("output_path", defaults.output_path)),
    )


__all__ = ["CONFIG_DIR", "PLATFORMS", "BuilderConfig", "load_builder_config"]
