# src/adapters/create.py
"""
Create mod recipe adapters (everything except sequenced assembly).

All of these compile to event.custom({...}) JSON objects following Create's
recipe schema:

  - processing:  milling / crushing / pressing / cutting (one constructor)
  - basin:       mixing / compacting (one constructor, heat requirement)
  - deploying:   base + addition, optional keepHeldItem
  - filling:     item + fluid -> results
  - emptying:    item -> item results + fluid result
  - fan:         splashing / smoking / blasting / haunting (one constructor)
  - mechanical crafting: free-text pattern of any size + letter key

Ingredient lists carry no counts, except the milling / crushing input;
multi-input adapters expand counts into repeated entries via
ingredients.serialize.expand_ingredients.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Mapping, Optional

from ingredients.normalize import normalize_item, normalize_fluid
from ingredients.schema import ItemRef, FluidRef, OutputRef
from ingredients.serialize import (
    as_single,
    create_result_json,
    custom_line,
    expand_ingredients,
    fluid_to_json,
    item_to_json,
    output_to_json,
)

from .base import (
    revive_or_default,
    coerce_slots,
    coerce_outputs,
    coerce_fluid_slots,
    coerce_positive_int,
    coerce_recipe_id,
    coerce_bool,
)
from .patterns import pattern_letters
from .schema import RecipeAdapter, ValidationMessage, error, warning

FAMILY = "create"

MAX_BASIN_ITEMS = 9
MAX_BASIN_FLUIDS = 4

HEAT_NONE = "none"
HEAT_HEATED = "heated"
HEAT_SUPERHEATED = "superheated"
HEAT_TIERS = (HEAT_NONE, HEAT_HEATED, HEAT_SUPERHEATED)


def _recipe_type(adapter_id: str) -> str:
    """"create.milling" -> "create:milling"."""
    return "create:" + adapter_id.split(".", 1)[1]


def _example_id(adapter_id: str) -> str:
    return "example:" + adapter_id.replace(".", "_", 1)


def _outputs_of(*ids: str) -> Callable[[], List[OutputRef]]:
    def factory() -> List[OutputRef]:
        return [OutputRef(id=i) for i in ids]
    return factory


def _single_ingredient(item: Optional[ItemRef]) -> List[Dict[str, Any]]:
    return [item_to_json(as_single(item))] if item is not None else []


def _require_input_and_outputs(item: Optional[ItemRef], outputs: List[OutputRef]) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if item is None:
        msgs.append(error("Input item missing."))
    if not outputs:
        msgs.append(error("At least one output is required."))
    return msgs


# ---------------------------------------------------------------------------
# Processing: milling / crushing / pressing / cutting
# ---------------------------------------------------------------------------

@dataclass
class ProcessingPayload:
    input: Optional[ItemRef] = None
    outputs: List[OutputRef] = field(default_factory=list)
    processing_time: Optional[int] = None
    recipe_id: Optional[str] = None


def make_processing_adapter(
    adapter_id: str,
    title: str,
    default_output: str,
    keep_input_count: bool = False,
) -> RecipeAdapter:
    """
    Single input, chance-bearing outputs, optional processingTime.

    Milling and crushing consume a counted stack; pressing and cutting always
    take one item.
    """
    default_outputs = _outputs_of(default_output)
    recipe_type = _recipe_type(adapter_id)

    def default() -> ProcessingPayload:
        return ProcessingPayload(outputs=default_outputs(), recipe_id=_example_id(adapter_id))

    def revive(raw: Mapping[str, Any]) -> ProcessingPayload:
        return ProcessingPayload(
            input=normalize_item(raw.get("input")),
            outputs=coerce_outputs(raw.get("outputs"), default_outputs),
            processing_time=coerce_positive_int(raw.get("processing_time")),
            recipe_id=coerce_recipe_id(raw.get("recipe_id")),
        )

    def coerce(raw: Any) -> ProcessingPayload:
        return revive_or_default(raw, adapter_id, default, revive, ProcessingPayload)

    def validate(p: ProcessingPayload) -> List[ValidationMessage]:
        return _require_input_and_outputs(p.input, p.outputs)

    def compile(p: ProcessingPayload) -> List[str]:
        if keep_input_count and p.input is not None:
            ingredients = [item_to_json(p.input)]
        else:
            ingredients = _single_ingredient(p.input)
        obj: Dict[str, Any] = {
            "type": recipe_type,
            "ingredients": ingredients,
            "results": [output_to_json(o) for o in p.outputs],
        }
        if p.processing_time and p.processing_time > 0:
            obj["processingTime"] = p.processing_time
        return [custom_line(obj, p.recipe_id)]

    return RecipeAdapter(
        id=adapter_id,
        title=title,
        family=FAMILY,
        default=default,
        coerce=coerce,
        validate=validate,
        compile=compile,
    )


milling_adapter = make_processing_adapter("create.milling", "Create: Milling", "minecraft:wheat_seeds", keep_input_count=True)
crushing_adapter = make_processing_adapter("create.crushing", "Create: Crushing", "minecraft:gravel", keep_input_count=True)
pressing_adapter = make_processing_adapter("create.pressing", "Create: Pressing", "minecraft:iron_nugget")
cutting_adapter = make_processing_adapter("create.cutting", "Create: Cutting", "minecraft:stick")


# ---------------------------------------------------------------------------
# Basin: mixing / compacting
# ---------------------------------------------------------------------------

@dataclass
class BasinPayload:
    inputs: List[Optional[ItemRef]] = field(default_factory=list)
    fluids: List[Optional[FluidRef]] = field(default_factory=list)
    outputs: List[OutputRef] = field(default_factory=list)
    heat: str = HEAT_NONE
    recipe_id: Optional[str] = None


def _coerce_heat(value: Any) -> str:
    return value if value in HEAT_TIERS else HEAT_NONE


def make_basin_adapter(
    adapter_id: str,
    title: str,
    default_output: str,
    min_slots: int = 0,
) -> RecipeAdapter:
    """Multiple item inputs (counts expanded) + fluids, optional heat tier."""
    default_outputs = _outputs_of(default_output)
    recipe_type = _recipe_type(adapter_id)

    def default() -> BasinPayload:
        return BasinPayload(
            inputs=[None] * min_slots,
            outputs=default_outputs(),
            recipe_id=_example_id(adapter_id),
        )

    def revive(raw: Mapping[str, Any]) -> BasinPayload:
        return BasinPayload(
            inputs=coerce_slots(raw.get("inputs"), limit=MAX_BASIN_ITEMS, min_len=min_slots),
            fluids=coerce_fluid_slots(raw.get("fluids"), limit=MAX_BASIN_FLUIDS),
            outputs=coerce_outputs(raw.get("outputs"), default_outputs),
            heat=_coerce_heat(raw.get("heat")),
            recipe_id=coerce_recipe_id(raw.get("recipe_id")),
        )

    def coerce(raw: Any) -> BasinPayload:
        return revive_or_default(raw, adapter_id, default, revive, BasinPayload)

    def validate(p: BasinPayload) -> List[ValidationMessage]:
        msgs: List[ValidationMessage] = []
        if not any(i is not None for i in p.inputs) and not any(f is not None for f in p.fluids):
            msgs.append(error("At least one item or fluid input is required."))
        if not p.outputs:
            msgs.append(error("At least one output is required."))
        return msgs

    def compile(p: BasinPayload) -> List[str]:
        ingredients = expand_ingredients(p.inputs)
        ingredients.extend(fluid_to_json(f) for f in p.fluids if f is not None)
        obj: Dict[str, Any] = {
            "type": recipe_type,
            "ingredients": ingredients,
            "results": [output_to_json(o) for o in p.outputs],
        }
        if p.heat in (HEAT_HEATED, HEAT_SUPERHEATED):
            obj["heat_requirement"] = p.heat
        return [custom_line(obj, p.recipe_id)]

    return RecipeAdapter(
        id=adapter_id,
        title=title,
        family=FAMILY,
        default=default,
        coerce=coerce,
        validate=validate,
        compile=compile,
    )


mixing_adapter = make_basin_adapter("create.mixing", "Create: Mixing", "minecraft:iron_nugget", min_slots=2)
compacting_adapter = make_basin_adapter("create.compacting", "Create: Compacting", "minecraft:iron_block")


# ---------------------------------------------------------------------------
# Deploying
# ---------------------------------------------------------------------------

DEPLOYING_ID = "create.deploying"


@dataclass
class DeployingPayload:
    # [base, addition]
    inputs: List[Optional[ItemRef]] = field(default_factory=lambda: [None, None])
    outputs: List[OutputRef] = field(default_factory=_outputs_of("minecraft:iron_ingot"))
    keep_held_item: bool = False
    recipe_id: Optional[str] = _example_id(DEPLOYING_ID)


def _revive_deploying(raw: Mapping[str, Any]) -> DeployingPayload:
    return DeployingPayload(
        inputs=coerce_slots(raw.get("inputs"), limit=2, min_len=2),
        outputs=coerce_outputs(raw.get("outputs"), _outputs_of("minecraft:iron_ingot")),
        keep_held_item=coerce_bool(raw.get("keep_held_item"), False),
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_deploying(raw: Any) -> DeployingPayload:
    return revive_or_default(raw, DEPLOYING_ID, DeployingPayload, _revive_deploying, DeployingPayload)


def validate_deploying(p: DeployingPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if len(p.inputs) < 2 or p.inputs[0] is None or p.inputs[1] is None:
        msgs.append(error("Both inputs are required (base + addition)."))
    if not p.outputs:
        msgs.append(error("At least one output is required."))
    return msgs


def compile_deploying(p: DeployingPayload) -> List[str]:
    obj: Dict[str, Any] = {
        "type": "create:deploying",
        "ingredients": [item_to_json(as_single(i)) for i in p.inputs if i is not None],
        "results": [output_to_json(o) for o in p.outputs],
    }
    if p.keep_held_item:
        obj["keepHeldItem"] = True
    return [custom_line(obj, p.recipe_id)]


deploying_adapter = RecipeAdapter(
    id=DEPLOYING_ID,
    title="Create: Deploying",
    family=FAMILY,
    default=DeployingPayload,
    coerce=coerce_deploying,
    validate=validate_deploying,
    compile=compile_deploying,
)


# ---------------------------------------------------------------------------
# Filling
# ---------------------------------------------------------------------------

FILLING_ID = "create.filling"


@dataclass
class FillingPayload:
    item: Optional[ItemRef] = None
    fluid: Optional[FluidRef] = field(default_factory=lambda: FluidRef(id="minecraft:water", amount=1000))
    results: List[OutputRef] = field(default_factory=_outputs_of("minecraft:honey_bottle"))
    recipe_id: Optional[str] = _example_id(FILLING_ID)


def _revive_filling(raw: Mapping[str, Any]) -> FillingPayload:
    return FillingPayload(
        item=normalize_item(raw.get("item")),
        fluid=normalize_fluid(raw.get("fluid")),
        results=coerce_outputs(raw.get("results"), _outputs_of("minecraft:honey_bottle")),
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_filling(raw: Any) -> FillingPayload:
    return revive_or_default(raw, FILLING_ID, FillingPayload, _revive_filling, FillingPayload)


def validate_filling(p: FillingPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if p.item is None:
        msgs.append(error("Item missing."))
    if p.fluid is None:
        msgs.append(error("Fluid missing."))
    if not p.results:
        msgs.append(error("At least one result is required."))
    return msgs


def compile_filling(p: FillingPayload) -> List[str]:
    ingredients = _single_ingredient(p.item)
    if p.fluid is not None:
        ingredients.append(fluid_to_json(p.fluid))
    obj = {
        "type": "create:filling",
        "ingredients": ingredients,
        "results": [output_to_json(o) for o in p.results],
    }
    return [custom_line(obj, p.recipe_id)]


filling_adapter = RecipeAdapter(
    id=FILLING_ID,
    title="Create: Filling",
    family=FAMILY,
    default=FillingPayload,
    coerce=coerce_filling,
    validate=validate_filling,
    compile=compile_filling,
)


# ---------------------------------------------------------------------------
# Emptying
# ---------------------------------------------------------------------------

EMPTYING_ID = "create.emptying"


@dataclass
class EmptyingPayload:
    input: Optional[ItemRef] = None
    item_results: List[OutputRef] = field(default_factory=list)
    # fluid-typed result
    fluid: Optional[FluidRef] = field(default_factory=lambda: FluidRef(id="minecraft:water", amount=1000))
    recipe_id: Optional[str] = _example_id(EMPTYING_ID)


def _revive_emptying(raw: Mapping[str, Any]) -> EmptyingPayload:
    return EmptyingPayload(
        input=normalize_item(raw.get("input")),
        item_results=coerce_outputs(raw.get("item_results"), list),
        fluid=normalize_fluid(raw.get("fluid")),
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_emptying(raw: Any) -> EmptyingPayload:
    return revive_or_default(raw, EMPTYING_ID, EmptyingPayload, _revive_emptying, EmptyingPayload)


def validate_emptying(p: EmptyingPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if p.input is None:
        msgs.append(error("Input item missing."))
    if not p.item_results and p.fluid is None:
        msgs.append(warning("Neither an item result nor a fluid result is set."))
    return msgs


def compile_emptying(p: EmptyingPayload) -> List[str]:
    results: List[Dict[str, Any]] = [output_to_json(o) for o in p.item_results]
    if p.fluid is not None:
        results.append(fluid_to_json(p.fluid))
    obj = {
        "type": "create:emptying",
        "ingredients": _single_ingredient(p.input),
        "results": results,
    }
    return [custom_line(obj, p.recipe_id)]


emptying_adapter = RecipeAdapter(
    id=EMPTYING_ID,
    title="Create: Emptying",
    family=FAMILY,
    default=EmptyingPayload,
    coerce=coerce_emptying,
    validate=validate_emptying,
    compile=compile_emptying,
)


# ---------------------------------------------------------------------------
# Fan processing: splashing / smoking / blasting / haunting
# ---------------------------------------------------------------------------

@dataclass
class FanPayload:
    input: Optional[ItemRef] = None
    outputs: List[OutputRef] = field(default_factory=_outputs_of("minecraft:clay"))
    recipe_id: Optional[str] = None


def make_fan_adapter(adapter_id: str, title: str) -> RecipeAdapter:
    """Bulk fan processing; the variants only differ by recipe type string."""
    default_outputs = _outputs_of("minecraft:clay")
    recipe_type = _recipe_type(adapter_id)

    def default() -> FanPayload:
        return FanPayload(outputs=default_outputs(), recipe_id=_example_id(adapter_id))

    def revive(raw: Mapping[str, Any]) -> FanPayload:
        return FanPayload(
            input=normalize_item(raw.get("input")),
            outputs=coerce_outputs(raw.get("outputs"), default_outputs),
            recipe_id=coerce_recipe_id(raw.get("recipe_id")),
        )

    def coerce(raw: Any) -> FanPayload:
        return revive_or_default(raw, adapter_id, default, revive, FanPayload)

    def validate(p: FanPayload) -> List[ValidationMessage]:
        return _require_input_and_outputs(p.input, p.outputs)

    def compile(p: FanPayload) -> List[str]:
        obj = {
            "type": recipe_type,
            "ingredients": _single_ingredient(p.input),
            "results": [output_to_json(o) for o in p.outputs],
        }
        return [custom_line(obj, p.recipe_id)]

    return RecipeAdapter(
        id=adapter_id,
        title=title,
        family=FAMILY,
        default=default,
        coerce=coerce,
        validate=validate,
        compile=compile,
    )


splashing_adapter = make_fan_adapter("create.splashing", "Create: Splashing")
smoking_adapter = make_fan_adapter("create.smoking", "Create: Smoking")
blasting_fan_adapter = make_fan_adapter("create.blasting", "Create: Blasting (Fan)")
haunting_adapter = make_fan_adapter("create.haunting", "Create: Haunting")


# ---------------------------------------------------------------------------
# Mechanical crafting
# ---------------------------------------------------------------------------

MECHANICAL_ID = "create.mechanical_crafting"


@dataclass
class MechanicalPayload:
    pattern: List[str] = field(default_factory=lambda: [""])
    key: Dict[str, Optional[ItemRef]] = field(
        default_factory=lambda: {"A": ItemRef(id="minecraft:iron_ingot")}
    )
    result: ItemRef = field(default_factory=lambda: ItemRef(id="minecraft:iron_block"))
    accept_mirrored: Optional[bool] = False
    recipe_id: Optional[str] = "example:create_mechanical"


def _coerce_key(value: Any) -> Dict[str, Optional[ItemRef]]:
    if not isinstance(value, Mapping):
        return {}
    return {
        str(letter): normalize_item(item)
        for letter, item in value.items()
        if isinstance(letter, str) and letter
    }


def _revive_mechanical(raw: Mapping[str, Any]) -> MechanicalPayload:
    pattern = raw.get("pattern")
    if isinstance(pattern, (list, tuple)):
        lines = [line if isinstance(line, str) else "" for line in pattern]
    else:
        lines = [""]
    accept_mirrored = raw.get("accept_mirrored")
    return MechanicalPayload(
        pattern=lines,
        key=_coerce_key(raw.get("key")),
        result=normalize_item(raw.get("result")) or MechanicalPayload().result,
        accept_mirrored=accept_mirrored if isinstance(accept_mirrored, bool) else None,
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_mechanical(raw: Any) -> MechanicalPayload:
    return revive_or_default(raw, MECHANICAL_ID, MechanicalPayload, _revive_mechanical, MechanicalPayload)


def update_mechanical_pattern(p: MechanicalPayload, text: str) -> MechanicalPayload:
    """
    Apply a free-text pattern edit.

    The key follows the pattern: letters no longer used are dropped, newly
    typed letters get a None placeholder that must be filled before the
    payload validates. Existing mappings are kept.
    """
    lines = text.replace("\r", "").split("\n")
    used = pattern_letters(lines)
    key = {letter: p.key.get(letter) for letter in used}
    return replace(p, pattern=lines, key=key)


def validate_mechanical(p: MechanicalPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    used = pattern_letters(p.pattern)
    if not used:
        msgs.append(error("Pattern is empty."))
    for letter in used:
        if p.key.get(letter) is None:
            msgs.append(error(f"Mapping for '{letter}' is missing."))
    if p.result is None or not p.result.id:
        msgs.append(error("Result item missing."))
    return msgs


def compile_mechanical(p: MechanicalPayload) -> List[str]:
    used = pattern_letters(p.pattern)
    key_json: Dict[str, Any] = {}
    for letter in used:
        item = p.key.get(letter)
        if item is not None:
            key_json[letter] = item_to_json(as_single(item))
    obj: Dict[str, Any] = {
        "type": "create:mechanical_crafting",
        "pattern": list(p.pattern),
        "key": key_json,
        "result": create_result_json(p.result),
    }
    if isinstance(p.accept_mirrored, bool):
        obj["acceptMirrored"] = p.accept_mirrored
    return [custom_line(obj, p.recipe_id)]


mechanical_adapter = RecipeAdapter(
    id=MECHANICAL_ID,
    title="Create: Mechanical Crafting",
    family=FAMILY,
    default=MechanicalPayload,
    coerce=coerce_mechanical,
    validate=validate_mechanical,
    compile=compile_mechanical,
)


ADAPTERS = (
    milling_adapter,
    crushing_adapter,
    mixing_adapter,
    pressing_adapter,
    cutting_adapter,
    deploying_adapter,
    filling_adapter,
    emptying_adapter,
    splashing_adapter,
    smoking_adapter,
    blasting_fan_adapter,
    haunting_adapter,
    compacting_adapter,
    mechanical_adapter,
)
