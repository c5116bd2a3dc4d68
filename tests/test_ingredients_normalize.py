# tests/test_ingredients_normalize.py
"""
Normalizers must accept sloppy form / storage values and either return a
canonical value object or None, never raise.
"""

import math

from ingredients.normalize import (
    normalize_item,
    normalize_fluid,
    normalize_output,
    parse_structured_text,
    normalize_id_suffix,
    namespaced_recipe_id,
)
from ingredients.schema import ItemRef, FluidRef, OutputRef


def test_normalize_item_rejects_missing_or_blank_ids():
    assert normalize_item(None) is None
    assert normalize_item({}) is None
    assert normalize_item({"id": ""}) is None
    assert normalize_item({"id": "   "}) is None
    assert normalize_item({"id": 42}) is None


def test_normalize_item_trims_and_clamps():
    item = normalize_item({"id": "  minecraft:stick ", "count": 0, "nbt": "   "})
    assert item == ItemRef(id="minecraft:stick", count=1, nbt=None)

    assert normalize_item({"id": "minecraft:stick", "count": "lots"}).count == 1
    assert normalize_item({"id": "minecraft:stick", "count": -4}).count == 1
    assert normalize_item({"id": "minecraft:stick", "count": 3.7}).count == 3
    assert normalize_item({"id": "minecraft:bow", "nbt": ' {"Damage":0} '}).nbt == '{"Damage":0}'


def test_normalize_item_accepts_value_objects():
    item = ItemRef(id="minecraft:stick", count=2)
    assert normalize_item(item) == item


def test_normalize_item_is_idempotent():
    raws = [
        {"id": " minecraft:stick ", "count": 0},
        {"id": "#c:ingots/iron", "count": 5, "nbt": ""},
        {"id": "minecraft:bow", "nbt": '{"Damage":0}'},
    ]
    for raw in raws:
        once = normalize_item(raw)
        assert normalize_item(once) == once


def test_normalize_fluid_clamps_amount():
    assert normalize_fluid({"id": "minecraft:water", "amount": 0}) == FluidRef(id="minecraft:water", amount=1)
    assert normalize_fluid({"id": "minecraft:lava", "amount": 250}).amount == 250
    assert normalize_fluid({"id": ""}) is None
    assert normalize_fluid(None) is None


def test_non_finite_counts_and_amounts_clamp_to_one():
    for bad in (math.inf, -math.inf, math.nan):
        assert normalize_item({"id": "minecraft:stick", "count": bad}).count == 1
        assert normalize_fluid({"id": "minecraft:water", "amount": bad}).amount == 1
        assert normalize_output({"id": "minecraft:gravel", "count": bad}).count == 1


def test_normalize_output_keeps_numeric_chance_verbatim():
    assert normalize_output({"id": "minecraft:gravel", "chance": 1.5}).chance == 1.5
    assert normalize_output({"id": "minecraft:gravel", "chance": 0.25}).chance == 0.25
    assert normalize_output({"id": "minecraft:gravel", "chance": 1}).chance == 1.0


def test_normalize_output_drops_non_numeric_chance():
    assert normalize_output({"id": "minecraft:gravel", "chance": "0.5"}).chance is None
    assert normalize_output({"id": "minecraft:gravel", "chance": True}).chance is None
    assert normalize_output({"id": "minecraft:gravel", "chance": math.nan}).chance is None
    assert normalize_output({"id": "", "chance": 0.5}) is None


def test_normalize_output_returns_output_ref():
    out = normalize_output({"id": "minecraft:gravel", "count": 2})
    assert isinstance(out, OutputRef)
    assert out.count == 2


def test_parse_structured_text_treats_failures_as_absent():
    assert parse_structured_text('{"Damage": 0}') == {"Damage": 0}
    assert parse_structured_text("{Damage:0}") is None
    assert parse_structured_text("") is None
    assert parse_structured_text(None) is None


def test_normalize_id_suffix_example():
    assert normalize_id_suffix("ShadouKube:Iron Seeds!!", "shadoukube") == "iron-seeds"
    assert namespaced_recipe_id("ShadouKube:Iron Seeds!!", "shadoukube") == "shadoukube:iron-seeds"


def test_normalize_id_suffix_edge_cases():
    assert normalize_id_suffix("..a..b..") == "a..b"
    assert normalize_id_suffix("ores/Copper_Dust") == "ores/copper_dust"
    assert normalize_id_suffix("!!!") == ""
    assert normalize_id_suffix(None) == ""
    assert namespaced_recipe_id("!!!") is None


def test_normalize_id_suffix_is_idempotent():
    for raw in ["ShadouKube:Iron Seeds!!", "  --Mixed CASE__id--  ", "a///b"]:
        once = normalize_id_suffix(raw, "shadoukube")
        assert normalize_id_suffix(once, "shadoukube") == once
