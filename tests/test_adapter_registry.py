# tests/test_adapter_registry.py

import pytest

from adapters.registry import (
    PLUGINS,
    describe_all,
    get_adapter,
    get_plugin,
    list_adapter_ids,
    require_adapter,
)


EXPECTED_IDS = [
    "vanilla.shaped",
    "vanilla.shapeless",
    "vanilla.smelting",
    "create.milling",
    "create.crushing",
    "create.mixing",
    "create.pressing",
    "create.cutting",
    "create.deploying",
    "create.filling",
    "create.emptying",
    "create.splashing",
    "create.smoking",
    "create.blasting",
    "create.haunting",
    "create.compacting",
    "create.mechanical_crafting",
    "create.sequenced",
    "custom.generic",
]


def test_registry_order_and_ids():
    assert [p.id for p in PLUGINS] == ["vanilla", "create", "custom"]
    assert list_adapter_ids() == EXPECTED_IDS
    assert len(set(EXPECTED_IDS)) == len(EXPECTED_IDS)


def test_adapter_family_matches_plugin():
    for plugin in PLUGINS:
        for adapter in plugin.adapters:
            assert adapter.family == plugin.id


def test_get_adapter_returns_none_for_unknown():
    assert get_adapter("vanilla.shaped").title == "Vanilla: Shaped Crafting"
    assert get_adapter("gregtech.assembler") is None


def test_require_adapter_raises_key_error():
    with pytest.raises(KeyError):
        require_adapter("gregtech.assembler")
    assert require_adapter("create.sequenced").id == "create.sequenced"


def test_get_plugin_and_describe():
    assert get_plugin("create").title == "Create"
    assert get_plugin("mekanism") is None
    listing = describe_all()
    assert listing["custom"] == [{"id": "custom.generic", "title": "Custom: event.custom"}]


@pytest.mark.parametrize("adapter_id", EXPECTED_IDS)
def test_every_default_compiles_and_survives_coerce(adapter_id):
    adapter = require_adapter(adapter_id)
    default = adapter.default()
    assert adapter.coerce(default) == default
    lines = adapter.compile(default)
    assert lines
    assert all(line.endswith(";") for line in lines)
    assert isinstance(adapter.validate(default), list)
