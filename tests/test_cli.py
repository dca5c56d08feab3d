"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from brandtokens.cli import _build_parser, main
from tests._fixtures.snapshot_builder import SnapshotBuilder

_CONFIG = """
tokenCollectionId: tok
primitiveCollectionId: prim
brands:
  - name: Brand A
    light:
      modeId: tm-light
      primitiveModeId: pm-light
"""


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "collections", "vars.json"])
    assert args.verbose is True
    assert args.command == "collections"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["export", "vars.json", "-c", "export.yml", "--verbose"])
    assert args.verbose is True
    assert args.command == "export"
    assert args.config == "export.yml"
    assert args.output is None


def test_cli_export_requires_config() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["export", "vars.json"])


def test_export_writes_output_file(tmp_path: Path, design_system: SnapshotBuilder) -> None:
    source_path = design_system.write(tmp_path / "vars.json")
    config_path = tmp_path / "export.yml"
    config_path.write_text(_CONFIG, encoding="utf-8")
    output = tmp_path / "tokens.json"

    main(["export", str(source_path), "-c", str(config_path), "-o", str(output)])

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["tokens"][0]["name"] == "Colors"
    assert data["metadata"]["generator"] == "Multibrand Token Exporter"


def test_export_into_directory_names_file_after_collection(tmp_path: Path, design_system: SnapshotBuilder) -> None:
    source_path = design_system.write(tmp_path / "vars.json")
    config_path = tmp_path / "export.yml"
    config_path.write_text(_CONFIG, encoding="utf-8")
    out_dir = tmp_path / "dist"
    out_dir.mkdir()

    main(["export", str(source_path), "-c", str(config_path), "-o", str(out_dir)])

    assert (out_dir / "brand-tokens.json").exists()


def test_export_to_stdout(tmp_path: Path, design_system: SnapshotBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    source_path = design_system.write(tmp_path / "vars.json")
    config_path = tmp_path / "export.yml"
    config_path.write_text(_CONFIG, encoding="utf-8")

    main(["export", str(source_path), "-c", str(config_path)])

    data = json.loads(capsys.readouterr().out)
    assert set(data) == {"metadata", "tokens"}


def test_export_unknown_collection_exits_nonzero(tmp_path: Path, design_system: SnapshotBuilder) -> None:
    source_path = design_system.write(tmp_path / "vars.json")
    config_path = tmp_path / "export.yml"
    config_path.write_text(_CONFIG.replace("prim\n", "missing\n", 1), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["export", str(source_path), "-c", str(config_path)])

    assert excinfo.value.code == 1


def test_missing_source_exits_nonzero(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["collections", str(tmp_path / "absent.json")])
    assert excinfo.value.code == 1


def test_collections_lists_modes(tmp_path: Path, design_system: SnapshotBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    source_path = design_system.write(tmp_path / "vars.json")

    main(["collections", str(source_path)])

    data = json.loads(capsys.readouterr().out)
    assert [item["id"] for item in data] == ["prim", "tok"]
    assert data[1]["modes"][0] == {"modeId": "tm-light", "name": "Brand A Light"}


def test_malformed_color_channel_exits_nonzero(tmp_path: Path, snapshot_builder: SnapshotBuilder) -> None:
    snapshot_builder.collection("prim", "Primitives", [("m1", "Light")])
    snapshot_builder.variable("bad", "Colors/Bad", "prim", {"m1": {"r": "red", "g": 0, "b": 0}})
    source_path = snapshot_builder.write(tmp_path / "vars.json")

    with pytest.raises(SystemExit) as excinfo:
        main(["collections", str(source_path)])

    assert excinfo.value.code == 1


def test_cli_accepts_log_file_before_or_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--log-file", "a.log", "collections", "v.json"]).log_file == "a.log"
    assert parser.parse_args(["collections", "v.json", "--log-file", "b.log"]).log_file == "b.log"
    assert parser.parse_args(["collections", "v.json"]).log_file is None


def test_log_file_receives_debug_records(tmp_path: Path, design_system: SnapshotBuilder) -> None:
    source_path = design_system.write(tmp_path / "vars.json")
    log_path = tmp_path / "logs" / "brandtokens.log"

    main(["collections", str(source_path), "-v", "--log-file", str(log_path)])

    text = log_path.read_text(encoding="utf-8")
    assert "DEBUG brandtokens.source: Loaded 2 collections and 6 variables" in text
