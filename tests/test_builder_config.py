# tests/test_builder_config.py

import pytest

from project import config as builder_config
from project.config import BuilderConfig, load_builder_config
from project.schema import ProjectMeta


def test_repo_config_loads():
    cfg = load_builder_config()
    assert cfg.namespace == "shadoukube"
    assert cfg.platform in builder_config.PLATFORMS
    assert cfg.output_path.endswith("recipes.js")


def test_missing_keys_keep_defaults(tmp_path, monkeypatch):
    (tmp_path / "builder.yaml").write_text("platform: Fabric\nnamespace: MyPack\n", encoding="utf-8")
    monkeypatch.setattr(builder_config, "CONFIG_DIR", tmp_path)

    cfg = load_builder_config()
    assert cfg.platform == "Fabric"
    assert cfg.namespace == "mypack"
    assert cfg.minecraft_version == BuilderConfig().minecraft_version
    assert cfg.meta() == ProjectMeta(platform="Fabric")


def test_empty_file_is_all_defaults(tmp_path):
    path = tmp_path / "builder.yaml"
    path.write_text("", encoding="utf-8")
    assert load_builder_config(path) == BuilderConfig()


def test_unknown_platform_rejected(tmp_path):
    path = tmp_path / "builder.yaml"
    path.write_text("platform: Quilt\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_builder_config(path)


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "builder.yaml"
    path.write_text("- NeoForge\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_builder_config(path)


def test_missing_file(tmp_path, monkeypatch):
    monkeypatch.setattr(builder_config, "CONFIG_DIR", tmp_path)
    with pytest.raises(FileNotFoundError):
        load_builder_config()
