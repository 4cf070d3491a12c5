from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from careermatch.config import ConfigManager, read_config_file
from careermatch.container import create_container
from careermatch.schemas.config import AppConfig, load_config


def test_create_container_without_settings_uses_bundled_catalog():
    container = create_container()

    engine = container.engine()

    assert len(engine.catalog) > 0
    assert engine.catalog.by_id("data-scientist") is not None
    assert engine.defaults.limit == 5
    assert container.engine() is engine


def test_create_container_with_overrides(tmp_path: Path):
    catalog_path = tmp_path / "careers.yaml"
    catalog_path.write_text(
        "- {id: ops, title: Ops, category: it, requiredSkills: [pwsh, Linux]}\n",
        encoding="utf-8",
    )
    container = create_container(
        settings={
            "recommend": {"limit": 2, "min_score": 0.25},
            "matcher": {"partial_min_length": 4, "score_basis": "combined"},
            "normalizer": {"aliases": {"pwsh": "powershell"}},
            "catalog": {"path": "careers.yaml"},
            "storage": {"base_path": str(tmp_path)},
        }
    )

    engine = container.engine()
    matcher = container.matcher()

    assert engine.defaults.limit == 2
    assert engine.defaults.min_score == 0.25
    assert matcher.config.partial_min_length == 4
    assert matcher.config.score_basis == "combined"
    assert container.document_store().base_path == tmp_path
    assert [s.token for s in engine.catalog.by_id("ops").required_skills] == ["powershell", "linux"]
    assert [rec.career.id for rec in engine.recommend(["PowerShell"])] == ["ops"]


def test_load_config_validation():
    data = {
        "recommend": {"limit": 3},
        "matcher": {"required_partial_weight": 0.6},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["recommend"] == {"limit": 3, "min_score": 0.0}
    assert settings["matcher"]["required_partial_weight"] == 0.6
    assert "normalizer" not in settings


@pytest.mark.parametrize(
    "data",
    [
        {"recommend": {"limit": 0}},
        {"recommend": {"min_score": 1.5}},
        {"matcher": {"desirable_weight": 0.1, "desirable_partial_weight": 0.2}},
        {"unexpected": True},
        {"recomend": {"limit": 3}},
    ],
)
def test_load_config_rejects_invalid_values(data):
    with pytest.raises(ValidationError):
        load_config(data)


def test_load_config_rejects_non_mapping():
    with pytest.raises(ValidationError):
        load_config(["limit", 3])


def test_config_manager_loads_named_yaml(tmp_path: Path):
    (tmp_path / "prod.yml").write_text("recommend:\n  limit: 7\n", encoding="utf-8")
    (tmp_path / "empty.yaml").write_text("", encoding="utf-8")
    manager = ConfigManager(tmp_path)

    assert manager.load("prod") == {"recommend": {"limit": 7}}
    assert manager.load("empty") == {}
    assert manager.load_app_config("prod.yml").recommend.limit == 7
    assert read_config_file(tmp_path / "prod.yml").recommend.limit == 7


def test_config_manager_rejects_non_mapping_yaml(tmp_path: Path):
    (tmp_path / "list.yaml").write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError):
        ConfigManager(tmp_path).load("list")
