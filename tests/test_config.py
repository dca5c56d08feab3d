"""Tests for brandtokens.config."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from brandtokens.config import load_config, parse_export_config
from brandtokens.errors import ConfigError
from brandtokens.models import ModeBinding


def test_load_config_parses_yaml(tmp_path: Path) -> None:
    config_file = tmp_path / "export.yml"
    config_file.write_text(
        """
tokenCollectionId: "VariableCollectionId:1:2"
primitiveCollectionId: "VariableCollectionId:1:1"
lang: fr
brands:
  - name: Acme
    light:
      modeId: "1:10"
      primitiveModeId: "1:0"
    dark:
      modeId: "1:11"
      primitiveModeId: "1:1"
  - name: Globex
    light:
      modeId: "1:12"
      primitiveModeId: "1:0"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.token_collection_id == "VariableCollectionId:1:2"
    assert config.primitive_collection_id == "VariableCollectionId:1:1"
    assert config.lang == "fr"
    assert [brand.name for brand in config.brands] == ["Acme", "Globex"]
    assert config.brands[0].dark == ModeBinding(mode_id="1:11", primitive_mode_id="1:1")
    assert config.brands[1].dark is None


def test_load_config_parses_json(tmp_path: Path) -> None:
    config_file = tmp_path / "export.json"
    config_file.write_text(
        json.dumps(
            {
                "tokenCollectionId": "tok",
                "primitiveCollectionId": "prim",
                "brands": [{"name": "Only", "dark": {"modeId": "d", "primitiveModeId": "pd"}}],
            }
        ),
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.lang == "en"
    assert config.brands[0].light is None
    assert [mode_type for mode_type, _ in config.brands[0].bindings()] == ["dark"]


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "absent.yml")


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    config_file = tmp_path / "export.yml"
    config_file.write_text("brands: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(config_file)


def test_parse_export_config_requires_collection_ids() -> None:
    with pytest.raises(ConfigError, match="required"):
        parse_export_config({"tokenCollectionId": "tok", "brands": []})


def test_parse_export_config_requires_brand_names() -> None:
    with pytest.raises(ConfigError, match="Brand #1"):
        parse_export_config(
            {"tokenCollectionId": "tok", "primitiveCollectionId": "prim", "brands": [{"light": {}}]}
        )


def test_parse_export_config_rejects_non_mapping() -> None:
    with pytest.raises(ConfigError):
        parse_export_config(["tok", "prim"])


def test_binding_without_mode_id_is_ignored() -> None:
    config = parse_export_config(
        {
            "tokenCollectionId": "tok",
            "primitiveCollectionId": "prim",
            "brands": [{"name": "Partial", "light": {"primitiveModeId": "p"}}],
        }
    )
    assert config.brands[0].light is None
    assert list(config.brands[0].bindings()) == []
