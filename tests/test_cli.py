"""Tests for the CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rent_estimate.cli import app

runner = CliRunner()

CATALOGUE = [
    {
        "neighborhood": "Centro",
        "city": "Belo Horizonte",
        "types": {"apartment": {"avgPricePerSqm": 20, "adjustments": {"bedrooms": 50}}},
    },
    {
        "neighborhood": "Moema",
        "city": "São Paulo",
        "types": {"apartment": {"avgPricePerSqm": 70}},
    },
]


@pytest.fixture
def config_file(tmp_path, monkeypatch) -> Path:
    monkeypatch.delenv("RENT_ESTIMATE_PARAMETERS", raising=False)
    (tmp_path / "params.json").write_text(json.dumps(CATALOGUE), encoding="utf-8")
    path = tmp_path / "config.yaml"
    path.write_text("reference_city: Belo Horizonte\nparameters_path: params.json\n", encoding="utf-8")
    return path


class TestEstimateCommand:
    def test_range_printed(self, config_file) -> None:
        result = runner.invoke(
            app, ["estimate", "-t", "apartment", "-n", "Centro", "-a", "80", "--bedrooms", "2", "-c", str(config_file)]
        )
        assert result.exit_code == 0
        assert "R$ 1.530,00 - R$ 1.870,00" in result.output

    def test_json_output(self, config_file) -> None:
        result = runner.invoke(
            app, ["estimate", "-t", "apartment", "-n", "centro", "-a", "80", "--json", "-c", str(config_file)]
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["result"]["estimated_rent"] == 1600
        assert data["property"]["city"] == "Belo Horizonte"

    def test_unknown_neighborhood_message(self, config_file) -> None:
        result = runner.invoke(app, ["estimate", "-t", "apartment", "-n", "Lourdes", "-a", "80", "-c", str(config_file)])
        assert result.exit_code == 0
        assert "Lourdes" in result.output

    def test_strict_rejects_bad_area(self, config_file) -> None:
        result = runner.invoke(
            app, ["estimate", "-t", "apartment", "-n", "Centro", "-a", "eighty", "--strict", "-c", str(config_file)]
        )
        assert result.exit_code == 1
        assert "interior_area" in result.output

    def test_missing_config(self, tmp_path) -> None:
        result = runner.invoke(app, ["estimate", "-c", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1


class TestBatchCommand:
    def test_batch_exports(self, config_file, tmp_path) -> None:
        input_path = tmp_path / "props.csv"
        input_path.write_text(
            "id,type,neighborhood,interior_area,bedrooms\n"
            "a,apartment,Centro,80,2\n"
            "b,apartment,Lourdes,80,\n"
            "c,apartment,Centro,,\n",
            encoding="utf-8",
        )
        out_dir = tmp_path / "output"
        result = runner.invoke(app, ["batch", str(input_path), "-o", str(out_dir), "-c", str(config_file)])
        assert result.exit_code == 0
        assert "Estimated 1/3" in result.output
        json_files = list(out_dir.glob("estimates_*.json"))
        assert len(json_files) == 1
        data = json.loads(json_files[0].read_text(encoding="utf-8"))
        assert [r["id"] for r in data["results"]] == ["a", "b", "c"]
        assert len(list(out_dir.glob("estimates_*.csv"))) == 1

    def test_batch_missing_input(self, config_file, tmp_path) -> None:
        result = runner.invoke(app, ["batch", str(tmp_path / "none.csv"), "-c", str(config_file)])
        assert result.exit_code == 1


class TestCatalogueCommands:
    def test_neighborhoods_reference_city(self, config_file) -> None:
        result = runner.invoke(app, ["neighborhoods", "-c", str(config_file)])
        assert result.exit_code == 0
        assert "Centro" in result.output
        assert "Moema" not in result.output

    def test_neighborhoods_all(self, config_file) -> None:
        result = runner.invoke(app, ["neighborhoods", "--all", "-c", str(config_file)])
        assert "Moema" in result.output

    def test_neighborhoods_missing_catalogue(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("RENT_ESTIMATE_PARAMETERS", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("parameters_path: missing.yaml\n", encoding="utf-8")
        result = runner.invoke(app, ["neighborhoods", "-c", str(path)])
        assert result.exit_code == 1

    def test_types(self) -> None:
        result = runner.invoke(app, ["types"])
        assert result.exit_code == 0
        assert "house-residential" in result.output
        assert "needs-renovation" in result.output
