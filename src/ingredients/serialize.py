# src/ingredients/serialize.py
"""
Serialization helpers for canonical recipe values.

Two parallel output styles are produced from the same value objects:

- script-call tokens for the KubeJS recipe API
  ('2x minecraft:stick', Item.of('minecraft:bow', {...}).withChance(0.5))
- JSON-serializable dicts for event.custom(...) recipe objects
  ({"item": ...} / {"tag": ...} / {"id": ...} / {"fluid": ..., "amount": ...})

Everything here is pure; callers decide which style a schema wants.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from .normalize import parse_structured_text
from .schema import ItemRef, FluidRef


# ---------------------------------------------------------------------------
# Small formatting helpers
# ---------------------------------------------------------------------------

def js_number(value: Any) -> Any:
    """Integral floats become ints so 1.0 prints as 1, the way JS would."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _quote(text: str) -> str:
    return "'" + text.replace("'", "\\'") + "'"


def chance_in_range(chance: Optional[float]) -> bool:
    """Only chances inside [0, 1) are meaningful; 1.0 means "always"."""
    return isinstance(chance, (int, float)) and 0 <= chance < 1


def as_single(item: ItemRef) -> ItemRef:
    """Same item with count forced to 1."""
    if item.count == 1:
        return item
    return replace(item, count=1)


# ---------------------------------------------------------------------------
# Script-call form
# ---------------------------------------------------------------------------

def item_to_script(item: ItemRef) -> str:
    """
    Render an ItemRef as a KubeJS item token.

      count 1          -> 'minecraft:stick'
      count 2          -> '2x minecraft:stick'
      with nbt         -> Item.of('2x minecraft:bow', {"Damage":0})
      tag with count 3 -> Item.of('#c:ingots', 3)
    """
    base = f"{item.count}x {item.id}" if item.count != 1 else item.id
    if item.nbt:
        return f"Item.of({_quote(base)}, {item.nbt})"
    if item.is_tag and item.count != 1:
        return f"Item.of({_quote(item.id)}, {item.count})"
    return _quote(base)


def output_to_script(output: ItemRef) -> str:
    """Item token plus a .withChance(c) modifier when the chance is in range."""
    base = item_to_script(output)
    chance = getattr(output, "chance", None)
    if not chance_in_range(chance):
        return base
    if base.startswith("Item.of("):
        return f"{base}.withChance({js_number(chance)})"
    return f"Item.of({base}).withChance({js_number(chance)})"


# ---------------------------------------------------------------------------
# JSON form
# ---------------------------------------------------------------------------

def item_to_json(item: ItemRef) -> Dict[str, Any]:
    """
    Ingredient-style JSON: {"item": id} or {"tag": id-without-#}.

    count is only written for plain items with count != 1; nbt only when it
    parses.
    """
    if item.is_tag:
        obj: Dict[str, Any] = {"tag": item.id[1:]}
    else:
        obj = {"item": item.id}
        if item.count != 1:
            obj["count"] = item.count
    nbt = parse_structured_text(item.nbt)
    if nbt is not None:
        obj["nbt"] = nbt
    return obj


def output_to_json(output: ItemRef) -> Dict[str, Any]:
    """
    Result-style JSON: {"id": id, "count"?, "chance"?, "nbt"?}.

    Never splits tags; chance only inside [0, 1).
    """
    obj: Dict[str, Any] = {"id": output.id}
    if output.count != 1:
        obj["count"] = output.count
    chance = getattr(output, "chance", None)
    if chance_in_range(chance):
        obj["chance"] = js_number(chance)
    nbt = parse_structured_text(output.nbt)
    if nbt is not None:
        obj["nbt"] = nbt
    return obj


def create_result_json(item: ItemRef) -> Dict[str, Any]:
    """Single {"item": id, "count"?, "nbt"?} result (mechanical crafting)."""
    obj: Dict[str, Any] = {"item": item.id}
    if item.count != 1:
        obj["count"] = item.count
    nbt = parse_structured_text(item.nbt)
    if nbt is not None:
        obj["nbt"] = nbt
    return obj


def transitional_ingredient(item: ItemRef) -> Dict[str, Any]:
    """Transitional item as a sequence-step ingredient: id only."""
    return {"item": item.id}


def fluid_to_json(fluid: FluidRef) -> Dict[str, Any]:
    return {"fluid": fluid.id, "amount": max(1, int(fluid.amount))}


def expand_ingredients(items: Iterable[Optional[ItemRef]]) -> List[Dict[str, Any]]:
    """
    Expand counted ingredients into repeated single entries.

    Used wherever a schema forbids "count" on ingredients: an item with
    count 3 becomes three identical entries without a count field. Empty
    slots are skipped.
    """
    out: List[Dict[str, Any]] = []
    for item in items:
        if item is None:
            continue
        single = item_to_json(as_single(item))
        for _ in range(max(1, item.count)):
            out.append(dict(single))
    return out


# ---------------------------------------------------------------------------
# Line wrappers
# ---------------------------------------------------------------------------

def _id_suffix(recipe_id: Optional[str]) -> str:
    if isinstance(recipe_id, str) and recipe_id.strip():
        return f".id({_quote(recipe_id)})"
    return ""


def script_line(call: str, recipe_id: Optional[str] = None) -> str:
    """Terminate a script call, appending .id('...') when a recipe id is set."""
    return f"{call}{_id_suffix(recipe_id)};"


def custom_line(obj: Dict[str, Any], recipe_id: Optional[str] = None) -> str:
    """Wrap a JSON recipe object in event.custom(...) with 2-space indentation."""
    body = json.dumps(obj, indent=2, ensure_ascii=False)
    return script_line(f"event.custom({body})", recipe_id)


__all__ = [
    "js_number",
    "chance_in_range",
    "as_single",
    "item_to_script",
    "output_to_script",
    "item_to_json",
    "output_to_json",
    "create_result_json",
    "transitional_ingredient",
    "fluid_to_json",
    "expand_ingredients",
    "script_line",
    "custom_line",
]
