# adapters package
# src/adapters/__init__.py

"""
Recipe adapters: one {default, coerce, validate, compile} bundle per recipe
kind, grouped into mod families by the registry.

- get_adapter(id)      -> RecipeAdapter | None
- require_adapter(id)  -> RecipeAdapter (KeyError when unknown)
- PLUGINS              -> ordered families (vanilla, create, custom)
- infer_pattern(grid)  -> shaped-crafting pattern + key
"""

from .schema import RecipeAdapter, ModPlugin, ValidationMessage, has_errors
from .base import TAG_FIELD, tag_payload, payload_to_dict, revive_or_default
from .patterns import PatternResult, infer_pattern, infer_pattern_json
from .registry import PLUGINS, get_adapter, require_adapter, list_adapter_ids

__all__ = [
    "RecipeAdapter",
    "ModPlugin",
    "ValidationMessage",
    "has_errors",
    "TAG_FIELD",
    "tag_payload",
    "payload_to_dict",
    "revive_or_default",
    "PatternResult",
    "infer_pattern",
    "infer_pattern_json",
    "PLUGINS",
    "get_adapter",
    "require_adapter",
    "list_adapter_ids",
]
