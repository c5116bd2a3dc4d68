# src/adapters/custom.py

"""
Generic event.custom adapter for any mod's JSON recipe type.

The recipe type is free text and ingredient counts are passed through as-is,
since the target schema is unknown. An optional `extra` JSON object is merged
underneath the canonical fields: keys from `extra` are copied first, then
"type", "ingredients" and "results" are assigned, so they always win.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ingredients.normalize import parse_structured_text
from ingredients.schema import ItemRef, OutputRef
from ingredients.serialize import custom_line, item_to_json, output_to_json

from .base import revive_or_default, coerce_slots, coerce_outputs, coerce_recipe_id
from .schema import RecipeAdapter, ValidationMessage, error

CUSTOM_ID = "custom.generic"

MAX_ENTRIES = 20


@dataclass
class CustomPayload:
    type: str = "create:mixing"
    ingredients: List[Optional[ItemRef]] = field(
        default_factory=lambda: [ItemRef(id="minecraft:stick", count=2)]
    )
    results: List[OutputRef] = field(default_factory=lambda: [OutputRef(id="minecraft:diamond")])
    extra: Optional[str] = ""
    recipe_id: Optional[str] = "example:custom_recipe"


def _revive_custom(raw: Mapping[str, Any]) -> CustomPayload:
    defaults = CustomPayload()
    recipe_type = raw.get("type")
    ingredients = raw.get("ingredients")
    extra = raw.get("extra")
    return CustomPayload(
        type=recipe_type if isinstance(recipe_type, str) else defaults.type,
        ingredients=(
            coerce_slots(ingredients, limit=MAX_ENTRIES)
            if isinstance(ingredients, (list, tuple))
            else defaults.ingredients
        ),
        results=coerce_outputs(raw.get("results"), lambda: CustomPayload().results, limit=MAX_ENTRIES),
        extra=extra if isinstance(extra, str) else None,
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_custom(raw: Any) -> CustomPayload:
    return revive_or_default(raw, CUSTOM_ID, CustomPayload, _revive_custom, CustomPayload)


def validate_custom(p: CustomPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if not isinstance(p.type, str) or not p.type.strip():
        msgs.append(error("Recipe type missing (e.g. create:mixing)."))
    if not p.results:
        msgs.append(error("At least one result is required."))
    return msgs


def build_custom_object(p: CustomPayload) -> Dict[str, Any]:
    """Merge `extra` first, then assign the canonical fields on top."""
    obj: Dict[str, Any] = {}
    extra = parse_structured_text(p.extra)
    if isinstance(extra, dict):
        obj.update(extra)
    obj["type"] = p.type
    obj["ingredients"] = [item_to_json(i) for i in p.ingredients if i is not None]
    obj["results"] = [output_to_json(o) for o in p.results]
    return obj


def compile_custom(p: CustomPayload) -> List[str]:
    return [custom_line(build_custom_object(p), p.recipe_id)]


custom_adapter = RecipeAdapter(
    id=CUSTOM_ID,
    title="Custom: event.custom",
    family="custom",
    default=CustomPayload,
    coerce=coerce_custom,
    validate=validate_custom,
    compile=compile_custom,
)

ADAPTERS = (custom_adapter,)
