# src/adapters/sequenced.py
"""
Create sequenced assembly adapter.

A sequenced assembly turns a starting ingredient into a transitional item
("create:incomplete_...") and runs it through an ordered list of steps,
`loops` times, before rolling the final results.

Compiled shape (event.custom JSON):

    {
      "type": "create:sequenced_assembly",
      "ingredient": {...},                  # starting item, always 1x
      "transitional_item": {"id": ...},     # id-only form
      "sequence": [ {step}, {step}, ... ],  # verbatim order, no dedup
      "results": [ {"id": ...}, ... ],
      "loops": N                            # >= 1
    }

Every step consumes the transitional item (first ingredient) and, unless a
custom step explicitly replaces them, produces the transitional item again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ingredients.normalize import normalize_item, normalize_fluid, normalize_output
from ingredients.schema import ItemRef, FluidRef, OutputRef
from ingredients.serialize import (
    as_single,
    custom_line,
    expand_ingredients,
    fluid_to_json,
    item_to_json,
    output_to_json,
    transitional_ingredient,
)

from .base import (
    revive_or_default,
    coerce_outputs,
    coerce_positive_int,
    coerce_recipe_id,
    coerce_bool,
)
from .schema import RecipeAdapter, ValidationMessage, error, warning

SEQUENCED_ID = "create.sequenced"

STEP_KINDS = ("pressing", "cutting", "deploying", "spouting", "emptying", "custom")
DEFAULT_CUSTOM_STEP_TYPE = "create:deploying"


# ---------------------------------------------------------------------------
# Step variants
# ---------------------------------------------------------------------------

@dataclass
class PressingStep:
    processing_time: Optional[int] = None
    auto_transitional_result: bool = True
    kind: str = field(default="pressing", init=False)


@dataclass
class CuttingStep:
    processing_time: Optional[int] = None
    auto_transitional_result: bool = True
    kind: str = field(default="cutting", init=False)


@dataclass
class DeployingStep:
    addition: Optional[ItemRef] = None
    keep_held_item: bool = False
    auto_transitional_result: bool = True
    kind: str = field(default="deploying", init=False)


@dataclass
class SpoutingStep:
    fluid: Optional[FluidRef] = field(default_factory=lambda: FluidRef(id="minecraft:water", amount=250))
    auto_transitional_result: bool = True
    kind: str = field(default="spouting", init=False)


@dataclass
class EmptyingStep:
    auto_transitional_result: bool = True
    kind: str = field(default="emptying", init=False)


@dataclass
class CustomStep:
    type: str = DEFAULT_CUSTOM_STEP_TYPE
    include_transitional: bool = True
    ingredients: List[Optional[ItemRef]] = field(default_factory=list)
    fluids: List[Optional[FluidRef]] = field(default_factory=list)
    results: Optional[List[OutputRef]] = None
    processing_time: Optional[int] = None
    auto_transitional_result: bool = True
    kind: str = field(default="custom", init=False)


SeqStep = Union[PressingStep, CuttingStep, DeployingStep, SpoutingStep, EmptyingStep, CustomStep]

_STEP_FACTORIES = {
    "pressing": PressingStep,
    "cutting": CuttingStep,
    "deploying": DeployingStep,
    "spouting": SpoutingStep,
    "emptying": EmptyingStep,
    "custom": CustomStep,
}


def new_step(kind: str) -> SeqStep:
    """Fresh step of the given kind with its editor defaults."""
    try:
        return _STEP_FACTORIES[kind]()
    except KeyError:
        raise ValueError(f"Unknown sequence step kind: {kind!r}")


def _field(raw: Any, name: str, default: Any = None) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name, default)
    return getattr(raw, name, default)


def coerce_step(raw: Any) -> SeqStep:
    """
    Repair one stored step. Unknown or missing kinds fall back to a plain
    pressing step.
    """
    kind = _field(raw, "kind")
    auto = coerce_bool(_field(raw, "auto_transitional_result"), True)

    if kind == "pressing":
        return PressingStep(
            processing_time=coerce_positive_int(_field(raw, "processing_time")),
            auto_transitional_result=auto,
        )
    if kind == "cutting":
        return CuttingStep(
            processing_time=coerce_positive_int(_field(raw, "processing_time")),
            auto_transitional_result=auto,
        )
    if kind == "deploying":
        return DeployingStep(
            addition=normalize_item(_field(raw, "addition")),
            keep_held_item=coerce_bool(_field(raw, "keep_held_item"), False),
            auto_transitional_result=auto,
        )
    if kind == "spouting":
        return SpoutingStep(fluid=normalize_fluid(_field(raw, "fluid")), auto_transitional_result=auto)
    if kind == "emptying":
        return EmptyingStep(auto_transitional_result=auto)
    if kind == "custom":
        step_type = _field(raw, "type")
        ingredients = _field(raw, "ingredients")
        fluids = _field(raw, "fluids")
        results = _field(raw, "results")
        return CustomStep(
            type=step_type if isinstance(step_type, str) and step_type.strip() else DEFAULT_CUSTOM_STEP_TYPE,
            include_transitional=coerce_bool(_field(raw, "include_transitional"), True),
            ingredients=[normalize_item(x) for x in ingredients] if isinstance(ingredients, (list, tuple)) else [],
            fluids=[normalize_fluid(x) for x in fluids] if isinstance(fluids, (list, tuple)) else [],
            results=(
                [r for r in (normalize_output(x) for x in results) if r is not None]
                if isinstance(results, (list, tuple))
                else None
            ),
            processing_time=coerce_positive_int(_field(raw, "processing_time")),
            auto_transitional_result=auto,
        )
    return PressingStep()


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------

def _default_transitional() -> ItemRef:
    return ItemRef(id="create:incomplete_component")


def _default_results() -> List[OutputRef]:
    return [OutputRef(id="minecraft:iron_ingot", chance=1.0)]


@dataclass
class SequencedPayload:
    input: Optional[ItemRef] = None
    transitional: ItemRef = field(default_factory=_default_transitional)
    loops: int = 1
    steps: List[SeqStep] = field(default_factory=lambda: [PressingStep()])
    results: List[OutputRef] = field(default_factory=_default_results)
    recipe_id: Optional[str] = "example:create_sequenced"


def _revive_sequenced(raw: Mapping[str, Any]) -> SequencedPayload:
    steps = raw.get("steps")
    loops = coerce_positive_int(raw.get("loops"))
    return SequencedPayload(
        input=normalize_item(raw.get("input")),
        transitional=normalize_item(raw.get("transitional")) or _default_transitional(),
        loops=loops if loops is not None else 1,
        steps=[coerce_step(s) for s in steps] if isinstance(steps, (list, tuple)) else [PressingStep()],
        results=coerce_outputs(raw.get("results"), _default_results),
        recipe_id=coerce_recipe_id(raw.get("recipe_id")),
    )


def coerce_sequenced(raw: Any) -> SequencedPayload:
    return revive_or_default(raw, SEQUENCED_ID, SequencedPayload, _revive_sequenced, SequencedPayload)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_sequenced(p: SequencedPayload) -> List[ValidationMessage]:
    msgs: List[ValidationMessage] = []
    if p.input is None:
        msgs.append(error("Starting ingredient missing."))
    if p.transitional is None or not p.transitional.id:
        msgs.append(error("Transitional item missing."))
    if not p.steps:
        msgs.append(error("At least one step is required."))
    if not p.results:
        msgs.append(error("At least one final result is required."))

    for idx, step in enumerate(p.steps, start=1):
        if isinstance(step, DeployingStep) and step.addition is None:
            msgs.append(warning(f"Step {idx} (deploying) has no addition item."))
        elif isinstance(step, SpoutingStep) and step.fluid is None:
            msgs.append(warning(f"Step {idx} (spouting) has no fluid."))
        elif isinstance(step, CustomStep) and not step.auto_transitional_result and not step.results:
            msgs.append(
                warning(f"Step {idx} (custom) has no explicit results; the transitional item is used.")
            )
    return msgs


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------

def _step_results(step: SeqStep, transitional: ItemRef) -> List[Dict[str, Any]]:
    if isinstance(step, CustomStep) and not step.auto_transitional_result and step.results:
        return [output_to_json(r) for r in step.results]
    return [output_to_json(transitional)]


def compile_step(step: SeqStep, transitional: ItemRef) -> Dict[str, Any]:
    """One entry of the "sequence" array."""
    ingredients: List[Dict[str, Any]] = [transitional_ingredient(transitional)]
    obj: Dict[str, Any]

    if isinstance(step, CustomStep):
        items = expand_ingredients(step.ingredients)
        fluids = [fluid_to_json(f) for f in step.fluids if f is not None]
        base = ingredients if step.include_transitional else []
        obj = {"type": step.type, "ingredients": base + items + fluids}
        if step.processing_time:
            obj["processingTime"] = step.processing_time
    elif isinstance(step, DeployingStep):
        if step.addition is not None:
            ingredients.append(item_to_json(as_single(step.addition)))
        obj = {"type": "create:deploying", "ingredients": ingredients}
        if step.keep_held_item:
            obj["keepHeldItem"] = True
    elif isinstance(step, SpoutingStep):
        if step.fluid is not None:
            ingredients.append(fluid_to_json(step.fluid))
        obj = {"type": "create:spouting", "ingredients": ingredients}
    else:
        obj = {"type": f"create:{step.kind}", "ingredients": ingredients}
        processing_time = getattr(step, "processing_time", None)
        if processing_time:
            obj["processingTime"] = processing_time

    obj["results"] = _step_results(step, transitional)
    return obj


def compile_sequenced(p: SequencedPayload) -> List[str]:
    obj: Dict[str, Any] = {
        "type": "create:sequenced_assembly",
        "ingredient": item_to_json(as_single(p.input)) if p.input is not None else {},
        "transitional_item": {"id": p.transitional.id},
        "sequence": [compile_step(step, p.transitional) for step in p.steps],
        "results": [output_to_json(r) for r in p.results],
        "loops": max(1, p.loops) if isinstance(p.loops, int) else 1,
    }
    return [custom_line(obj, p.recipe_id)]


sequenced_adapter = RecipeAdapter(
    id=SEQUENCED_ID,
    title="Create: Sequenced Assembly",
    family="create",
    default=SequencedPayload,
    coerce=coerce_sequenced,
    validate=validate_sequenced,
    compile=compile_sequenced,
)
