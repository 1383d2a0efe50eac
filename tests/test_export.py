"""Tests for batch export."""

import csv
import json

from rent_estimate.export import EstimateRow, export_csv, export_json
from rent_estimate.models import UNKNOWN_NEIGHBORHOOD, EstimationFailure, PropertyAttributes, RentRange


def _rows() -> list[EstimateRow]:
    attrs = PropertyAttributes("apartment", "Centro", city="Belo Horizonte", interior_area=80, bedrooms=2)
    ok = RentRange(
        min_rent=1530.0000001,
        max_rent=1870.0,
        estimated_rent=1700.0,
        base_value=1600.0,
        adjustments={"bedrooms": 100.0},
    )
    failed = EstimationFailure(UNKNOWN_NEIGHBORHOOD, "No rent data for neighborhood 'Lourdes' in Belo Horizonte.")
    return [
        EstimateRow(row_id="1", attributes=attrs, result=ok),
        EstimateRow(row_id="2", attributes=PropertyAttributes("apartment", "Lourdes", interior_area=50), result=failed),
    ]


def test_export_csv(tmp_path) -> None:
    path = tmp_path / "out" / "estimates.csv"
    export_csv(_rows(), path)
    with open(path, newline="", encoding="utf-8") as f:
        records = list(csv.DictReader(f))
    assert len(records) == 2
    assert records[0]["min_rent"] == "1530.0"
    assert records[0]["ok"] == "True"
    assert records[1]["reason"] == UNKNOWN_NEIGHBORHOOD
    assert records[1]["min_rent"] == ""


def test_export_json(tmp_path) -> None:
    path = tmp_path / "estimates.json"
    export_json(_rows(), path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["count"] == 2
    first = data["results"][0]
    assert first["property"]["type"] == "apartment"
    assert first["result"]["adjustments"] == {"bedrooms": 100.0}
    assert data["results"][1]["result"]["ok"] is False
