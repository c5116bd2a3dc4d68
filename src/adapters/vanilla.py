# src/adapters/vanilla.py
"""
Vanilla recipe adapters: shaped, shapeless and smelting.

These compile to native KubeJS recipe calls (event.shaped / event.shapeless /
event.smelting). Vanilla ingredient slots never carry counts: every input is
emitted as 1x regardless of what the stored payload says.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Any, Optional

from ingredients.normalize import normalize_item
from ingredients.schema import ItemRef
from ingredients.serialize import as_single, item_to_script, js_number, script_line

from .base import (
    revive_or_default,
    coerce_slots,
    coerce_number,
    coerce_positive_int,
    coerce_recipe_id,
)
from .patterns import infer_pattern
from .schema import RecipeAdapter, ValidationMessage, error

FAMILY = "vanilla"

GRID_SIZE = 3
SHAPELESS_SLOTS = 9


def empty_grid() -> List[List[Optional[ItemRef]]]:
    return [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


# ---------------------------------------------------------------------------
# Shaped crafting
# ---------------------------------------------------------------------------

SHAPED_ID = "vanilla.shaped"


@dataclass
class ShapedPayload:
    result: ItemRef = field(default_factory=lambda: ItemRef(id="minecraft:stick", count=2))
    grid: List[List[Optional[ItemRef]]] = field(default_factory=empty_grid)
    recipe_id: Optional[str] = None


def _revive_shaped(raw: Mapping[str, Any]) -> ShapedPayload:
    grid = raw.get("grid")
    is_square = (
        isinstance(grid, (list, tuple))
        and len(grid) == GRID_SIZE
        and all(isinstance(row, (list, tuple)) and len(row) == GRID_SIZE for row in grid)
    )
    return ShapedPayload(
        result=normalize_item(raw.get("result")) or ShapedPayload().result,
        grid=[coerce_slots(row) for row in grid] if is_square else empty_grid(),
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_shaped(raw: Any) -> ShapedPayload:
    return revive_or_default(raw, SHAPED_ID, ShapedPayload, _revive_shaped, ShapedPayload)


def validate_shaped(p: ShapedPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if not any(cell is not None for row in p.grid for cell in row):
        msgs.append(error("Grid is empty."))
    if p.result is None or not p.result.id:
        msgs.append(error("Result item missing."))
    return msgs


def compile_shaped(p: ShapedPayload) -> List[str]:
    inferred = infer_pattern(p.grid, serialize=item_to_script)
    pattern_js = "[" + ", ".join(f"'{row}'" for row in inferred.pattern) + "]"
    key_js = "{ " + ", ".join(f"{k}: {v}" for k, v in inferred.key.items()) + " }"
    call = f"event.shaped({item_to_script(p.result)}, {pattern_js}, {key_js})"
    return [script_line(call, p.recipe_id)]


shaped_adapter = RecipeAdapter(
    id=SHAPED_ID,
    title="Vanilla: Shaped Crafting",
    family=FAMILY,
    default=ShapedPayload,
    coerce=coerce_shaped,
    validate=validate_shaped,
    compile=compile_shaped,
)


# ---------------------------------------------------------------------------
# Shapeless crafting
# ---------------------------------------------------------------------------

SHAPELESS_ID = "vanilla.shapeless"


@dataclass
class ShapelessPayload:
    result: ItemRef = field(default_factory=lambda: ItemRef(id="minecraft:bread"))
    inputs: List[Optional[ItemRef]] = field(default_factory=lambda: [None] * SHAPELESS_SLOTS)
    recipe_id: Optional[str] = "example:bread_custom"


def _revive_shapeless(raw: Mapping[str, Any]) -> ShapelessPayload:
    return ShapelessPayload(
        result=normalize_item(raw.get("result")) or ShapelessPayload().result,
        inputs=coerce_slots(raw.get("inputs"), limit=SHAPELESS_SLOTS, min_len=SHAPELESS_SLOTS),
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_shapeless(raw: Any) -> ShapelessPayload:
    return revive_or_default(raw, SHAPELESS_ID, ShapelessPayload, _revive_shapeless, ShapelessPayload)


def validate_shapeless(p: ShapelessPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if not any(i is not None for i in p.inputs):
        msgs.append(error("At least one input is required."))
    if p.result is None or not p.result.id:
        msgs.append(error("Result item missing."))
    return msgs


def compile_shapeless(p: ShapelessPayload) -> List[str]:
    inputs = ", ".join(item_to_script(as_single(i)) for i in p.inputs if i is not None)
    call = f"event.shapeless({item_to_script(p.result)}, [{inputs}])"
    return [script_line(call, p.recipe_id)]


shapeless_adapter = RecipeAdapter(
    id=SHAPELESS_ID,
    title="Vanilla: Shapeless Crafting",
    family=FAMILY,
    default=ShapelessPayload,
    coerce=coerce_shapeless,
    validate=validate_shapeless,
    compile=compile_shapeless,
)


# ---------------------------------------------------------------------------
# Smelting (furnace)
# ---------------------------------------------------------------------------

SMELTING_ID = "vanilla.smelting"


@dataclass
class SmeltingPayload:
    input: Optional[ItemRef] = None
    result: ItemRef = field(default_factory=lambda: ItemRef(id="minecraft:glass"))
    xp: Optional[float] = 0.1
    cooking_time: Optional[int] = 200
    recipe_id: Optional[str] = None


def _revive_smelting(raw: Mapping[str, Any]) -> SmeltingPayload:
    return SmeltingPayload(
        input=normalize_item(raw.get("input")),
        result=normalize_item(raw.get("result")) or SmeltingPayload().result,
        xp=coerce_number(raw.get("xp")),
        cooking_time=coerce_positive_int(raw.get("cooking_time")),
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_smelting(raw: Any) -> SmeltingPayload:
    return revive_or_default(raw, SMELTING_ID, SmeltingPayload, _revive_smelting, SmeltingPayload)


def validate_smelting(p: SmeltingPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if p.input is None:
        msgs.append(error("Input item missing."))
    if p.result is None or not p.result.id:
        msgs.append(error("Result item missing."))
    return msgs


def compile_smelting(p: SmeltingPayload) -> List[str]:
    # A furnace only ever consumes one item.
    source = item_to_script(as_single(p.input)) if p.input is not None else "''"
    call = f"event.smelting({item_to_script(p.result)}, {source})"
    if p.xp is not None:
        call += f".xp({js_number(p.xp)})"
    if p.cooking_time and p.cooking_time > 0:
        call += f".cookingTime({p.cooking_time})"
    return [script_line(call, p.recipe_id)]


smelting_adapter = RecipeAdapter(
    id=SMELTING_ID,
    title="Vanilla: Smelting (Furnace)",
    family=FAMILY,
    default=SmeltingPayload,
    coerce=coerce_smelting,
    validate=validate_smelting,
    compile=compile_smelting,
)


ADAPTERS = (shaped_adapter, shapeless_adapter, smelting_adapter)
