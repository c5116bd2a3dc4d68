# src/adapters/registry.py
"""
Static adapter registry.

Adapters are grouped under mod plugins (families). The table is fixed at
import time; lookups scan families in order and return the first adapter
whose id matches.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from . import vanilla, create, sequenced, custom
from .schema import ModPlugin, RecipeAdapter


VANILLA_PLUGIN = ModPlugin(id="vanilla", title="Vanilla", adapters=vanilla.ADAPTERS)
CREATE_PLUGIN = ModPlugin(
    id="create",
    title="Create",
    adapters=create.ADAPTERS + (sequenced.sequenced_adapter,),
)
CUSTOM_PLUGIN = ModPlugin(id="custom", title="Custom", adapters=custom.ADAPTERS)

PLUGINS = (VANILLA_PLUGIN, CREATE_PLUGIN, CUSTOM_PLUGIN)


def iter_adapters(plugins: Iterable[ModPlugin] = PLUGINS) -> Iterable[RecipeAdapter]:
    for plugin in plugins:
        yield from plugin.adapters


def get_adapter(adapter_id: str, plugins: Iterable[ModPlugin] = PLUGINS) -> Optional[RecipeAdapter]:
    """Return the adapter with this id, or None if no family has it."""
    for adapter in iter_adapters(plugins):
        if adapter.id == adapter_id:
            return adapter
    return None


def require_adapter(adapter_id: str, plugins: Iterable[ModPlugin] = PLUGINS) -> RecipeAdapter:
    adapter = get_adapter(adapter_id, plugins)
    if adapter is None:
        raise KeyError(f"No recipe adapter registered for '{adapter_id}'")
    return adapter


def get_plugin(plugin_id: str) -> Optional[ModPlugin]:
    for plugin in PLUGINS:
        if plugin.id == plugin_id:
            return plugin
    return None


def list_adapter_ids() -> List[str]:
    return [a.id for a in iter_adapters()]


def describe_all() -> Dict[str, List[Dict[str, str]]]:
    """Family id -> [{"id", "title"}], in registry order (CLI listing)."""
    return {
        plugin.id: [{"id": a.id, "title": a.title} for a in plugin.adapters]
        for plugin in PLUGINS
    }


__all__ = [
    "VANILLA_PLUGIN",
    "CREATE_PLUGIN",
    "CUSTOM_PLUGIN",
    "PLUGINS",
    "iter_adapters",
    "get_adapter",
    "require_adapter",
    "get_plugin",
    "list_adapter_ids",
    "describe_all",
]
