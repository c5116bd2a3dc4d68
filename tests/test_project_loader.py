# tests/test_project_loader.py

import logging

import pytest
import yaml

from adapters.registry import require_adapter
from project.loader import load_project, save_project, scaffold_payload
from project.project import RecipeProject
from project.schema import ProjectMeta
from ingredients.schema import ItemRef


def build_project() -> RecipeProject:
    project = RecipeProject(namespace="testpack", meta=ProjectMeta(platform="Forge", minecraft_version="1.20.1"))
    project.commit(
        "vanilla.shaped",
        {
            "__type": "vanilla.shaped",
            "result": {"id": "minecraft:stick", "count": 4},
            "grid": [[None, {"id": "minecraft:oak_planks"}, None], [None, {"id": "minecraft:oak_planks"}, None], [None] * 3],
        },
        "sticks",
    )
    project.commit(
        "create.sequenced",
        {
            "__type": "create.sequenced",
            "input": {"id": "create:golden_sheet"},
            "steps": [
                {"kind": "deploying", "addition": {"id": "create:cogwheel"}},
                {"kind": "spouting", "fluid": {"id": "minecraft:lava", "amount": 100}},
            ],
            "loops": 5,
        },
        "precision_mechanism",
    )
    return project


def test_save_and_load_preserve_entries_and_output(tmp_path):
    project = build_project()
    path = tmp_path / "packs" / "project.yaml"
    save_project(project, path)

    loaded = load_project(path)
    assert loaded.namespace == "testpack"
    assert loaded.meta == project.meta
    assert loaded.entries == project.entries
    assert loaded.compile() == project.compile()


def test_saved_payloads_are_tagged(tmp_path):
    path = tmp_path / "project.yaml"
    save_project(build_project(), path)
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    tags = [e["payload"]["__type"] for e in data["entries"]]
    assert tags == ["vanilla.shaped", "create.sequenced"]


def test_unknown_adapters_are_dropped_on_load(tmp_path, caplog):
    path = tmp_path / "project.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "entries": [
                    {"entry_id": "a1", "adapter_id": "gregtech.assembler", "payload": {}},
                    {
                        "entry_id": "b2",
                        "adapter_id": "vanilla.smelting",
                        "payload": {"__type": "vanilla.smelting", "input": {"id": "minecraft:sand"}},
                    },
                    "not-a-mapping",
                ]
            }
        ),
        encoding="utf-8",
    )
    with caplog.at_level(logging.WARNING, logger="project.loader"):
        project = load_project(path)

    assert [e.entry_id for e in project.entries] == ["b2"]
    assert project.entries[0].payload.input == ItemRef(id="minecraft:sand")
    assert project.entries[0].label == "Vanilla: Smelting (Furnace)"
    assert project.namespace == "shadoukube"
    assert "gregtech.assembler" in caplog.text


def test_hand_edited_payload_without_tag_falls_back_to_default(tmp_path):
    path = tmp_path / "project.yaml"
    path.write_text(
        yaml.safe_dump({"entries": [{"entry_id": "c3", "adapter_id": "create.milling", "payload": {"input": "x"}}]}),
        encoding="utf-8",
    )
    project = load_project(path)
    assert project.entries[0].payload == require_adapter("create.milling").default()



def test_hand_edited_non_finite_numbers_load_as_unset(tmp_path):
    path = tmp_path / "project.yaml"
    path.write_text(
        "entries:\n"
        "- entry_id: m1\n"
        "  adapter_id: create.milling\n"
        "  payload:\n"
        "    __type: create.milling\n"
        "    input: {id: 'minecraft:wheat', count: .inf}\n"
        "    processing_time: .nan\n",
        encoding="utf-8",
    )
    payload = load_project(path).entries[0].payload
    assert payload.input == ItemRef(id="minecraft:wheat", count=1)
    assert payload.processing_time is None


def test_load_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_project(tmp_path / "missing.yaml")

    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_project(path)


def test_empty_file_is_an_empty_project(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    project = load_project(path)
    assert len(project) == 0
    assert project.meta == ProjectMeta()


def test_scaffold_payload_is_tagged_default():
    adapter = require_adapter("create.mixing")
    data = scaffold_payload(adapter)
    assert data["__type"] == "create.mixing"
    assert adapter.coerce(data) == adapter.default()
