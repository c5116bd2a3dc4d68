# tests/test_adapters_sequenced.py

import pytest

from adapters.base import tag_payload
from adapters.sequenced import (
    SEQUENCED_ID,
    STEP_KINDS,
    CustomStep,
    CuttingStep,
    DeployingStep,
    EmptyingStep,
    PressingStep,
    SequencedPayload,
    SpoutingStep,
    coerce_step,
    compile_step,
    new_step,
    sequenced_adapter,
)
from ingredients.schema import ItemRef, FluidRef, OutputRef


TRANSITIONAL = ItemRef(id="create:incomplete_component")
TRANSITIONAL_IN = {"item": "create:incomplete_component"}
TRANSITIONAL_OUT = {"id": "create:incomplete_component"}


def test_default_pressing_step_reproduces_transitional(custom_body):
    payload = SequencedPayload(input=ItemRef(id="create:golden_sheet", count=4), recipe_id="test:seq")
    (line,) = sequenced_adapter.compile(payload)
    assert line.endswith(".id('test:seq');")
    assert custom_body(line) == {
        "type": "create:sequenced_assembly",
        "ingredient": {"item": "create:golden_sheet"},
        "transitional_item": {"id": "create:incomplete_component"},
        "sequence": [
            {"type": "create:pressing", "ingredients": [TRANSITIONAL_IN], "results": [TRANSITIONAL_OUT]},
        ],
        "results": [{"id": "minecraft:iron_ingot"}],
        "loops": 1,
    }


def test_deploying_step():
    step = DeployingStep(addition=ItemRef(id="create:cogwheel", count=2), keep_held_item=True)
    assert compile_step(step, TRANSITIONAL) == {
        "type": "create:deploying",
        "ingredients": [TRANSITIONAL_IN, {"item": "create:cogwheel"}],
        "keepHeldItem": True,
        "results": [TRANSITIONAL_OUT],
    }


def test_spouting_and_emptying_steps():
    assert compile_step(SpoutingStep(), TRANSITIONAL) == {
        "type": "create:spouting",
        "ingredients": [TRANSITIONAL_IN, {"fluid": "minecraft:water", "amount": 250}],
        "results": [TRANSITIONAL_OUT],
    }
    assert compile_step(EmptyingStep(), TRANSITIONAL) == {
        "type": "create:emptying",
        "ingredients": [TRANSITIONAL_IN],
        "results": [TRANSITIONAL_OUT],
    }


def test_cutting_step_processing_time():
    assert compile_step(CuttingStep(processing_time=50), TRANSITIONAL)["processingTime"] == 50
    assert "processingTime" not in compile_step(CuttingStep(), TRANSITIONAL)


def test_custom_step_with_explicit_results():
    step = CustomStep(
        type="create:filling",
        include_transitional=False,
        ingredients=[ItemRef(id="x:a", count=2), None],
        fluids=[FluidRef(id="x:f", amount=10)],
        results=[OutputRef(id="x:out", chance=0.5)],
        processing_time=20,
        auto_transitional_result=False,
    )
    assert compile_step(step, TRANSITIONAL) == {
        "type": "create:filling",
        "ingredients": [{"item": "x:a"}, {"item": "x:a"}, {"fluid": "x:f", "amount": 10}],
        "processingTime": 20,
        "results": [{"id": "x:out", "chance": 0.5}],
    }


def test_custom_step_auto_result_ignores_explicit_results():
    step = CustomStep(results=[OutputRef(id="x:out")])
    obj = compile_step(step, TRANSITIONAL)
    assert obj["type"] == "create:deploying"
    assert obj["ingredients"] == [TRANSITIONAL_IN]
    assert obj["results"] == [TRANSITIONAL_OUT]


def test_sequence_order_is_verbatim(custom_body):
    payload = SequencedPayload(
        input=ItemRef(id="create:golden_sheet"),
        steps=[PressingStep(), PressingStep(), CuttingStep(), DeployingStep(addition=ItemRef(id="x:y"))],
        loops=3,
    )
    body = custom_body(sequenced_adapter.compile(payload)[0])
    assert [s["type"] for s in body["sequence"]] == [
        "create:pressing",
        "create:pressing",
        "create:cutting",
        "create:deploying",
    ]
    assert body["loops"] == 3


def test_missing_input_compiles_empty_ingredient_but_fails_validation(custom_body):
    payload = sequenced_adapter.default()
    assert custom_body(sequenced_adapter.compile(payload)[0])["ingredient"] == {}
    msgs = sequenced_adapter.validate(payload)
    assert [m.message for m in msgs] == ["Starting ingredient missing."]


def test_step_warnings_are_advisory():
    payload = SequencedPayload(
        input=ItemRef(id="create:golden_sheet"),
        steps=[DeployingStep(), SpoutingStep(fluid=None), CustomStep(auto_transitional_result=False)],
    )
    msgs = sequenced_adapter.validate(payload)
    assert len(msgs) == 3
    assert not any(m.is_error for m in msgs)
    assert msgs[0].message == "Step 1 (deploying) has no addition item."


def test_coerce_clamps_loops_and_falls_back_on_bad_steps():
    payload = sequenced_adapter.coerce(
        {"__type": SEQUENCED_ID, "loops": 0, "steps": [{"kind": "welding"}, {"kind": "cutting", "processing_time": 7}]}
    )
    assert payload.loops == 1
    assert payload.steps == [PressingStep(), CuttingStep(processing_time=7)]
    assert payload.transitional == TRANSITIONAL


def test_coerce_ignores_non_finite_numbers():
    payload = sequenced_adapter.coerce(
        {
            "__type": SEQUENCED_ID,
            "loops": float("inf"),
            "steps": [{"kind": "cutting", "processing_time": float("nan")}],
        }
    )
    assert payload.loops == 1
    assert payload.steps == [CuttingStep(processing_time=None)]


def test_stored_form_revives_to_same_payload():
    payload = SequencedPayload(
        input=ItemRef(id="create:golden_sheet"),
        steps=[
            DeployingStep(addition=ItemRef(id="create:cogwheel"), keep_held_item=True),
            SpoutingStep(fluid=FluidRef(id="minecraft:lava", amount=100)),
            CustomStep(type="x:weld", results=[OutputRef(id="x:out", chance=0.25)], auto_transitional_result=False),
        ],
        loops=2,
        recipe_id="test:seq",
    )
    assert sequenced_adapter.coerce(tag_payload(SEQUENCED_ID, payload)) == payload


def test_new_step_factory():
    assert [new_step(kind).kind for kind in STEP_KINDS] == list(STEP_KINDS)
    assert new_step("spouting").fluid == FluidRef(id="minecraft:water", amount=250)
    assert new_step("pressing") is not new_step("pressing")
    with pytest.raises(ValueError):
        new_step("welding")


def test_coerce_step_reads_custom_fields():
    step = coerce_step(
        {
            "kind": "custom",
            "type": "  ",
            "ingredients": [{"id": "x:a"}, {"id": ""}],
            "results": [{"id": "x:out"}, {"id": ""}],
        }
    )
    assert step.type == "create:deploying"
    assert step.ingredients == [ItemRef(id="x:a"), None]
    assert step.results == [OutputRef(id="x:out")]
    assert step.include_transitional is True
