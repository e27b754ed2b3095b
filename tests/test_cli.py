from __future__ import annotations

import json

from typer.testing import CliRunner

from csv2gexf.cli import app

runner = CliRunner()


def _write_config(tmp_path, config_dict) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_dict), encoding="utf-8")
    return str(path)


def test_prints_document_without_output(tmp_path, config_dict):
    result = runner.invoke(app, ["convert", _write_config(tmp_path, config_dict)])

    assert result.exit_code == 0, result.output
    assert "Graph constructed with 3 nodes and 3 edges." in result.output
    assert "<nodes>" in result.output


def test_output_overrides_save_as(tmp_path, config_dict):
    config_dict["saveAs"] = str(tmp_path / "ignored.gexf")
    target = tmp_path / "chosen.gexf"

    result = runner.invoke(app, ["convert", _write_config(tmp_path, config_dict), "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert target.exists()
    assert not (tmp_path / "ignored.gexf").exists()
    assert "GEXF document written to" in result.output


def test_failure_exits_with_status_one(tmp_path, config_dict):
    config_dict["edges"]["schema"] = ["source", "weight", "weight", "weight"]

    result = runner.invoke(app, ["convert", _write_config(tmp_path, config_dict)])

    assert result.exit_code == 1
    assert "Conversion failed" in result.output
