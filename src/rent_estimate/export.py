"""Export batch estimates to CSV and JSON."""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .models import EstimationResult, PropertyAttributes, RentRange


@dataclass
class EstimateRow:
    """One batch input row with its estimate."""

    row_id: str
    attributes: PropertyAttributes
    result: EstimationResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.row_id,
            "property": self.attributes.to_dict(),
            "result": self.result.to_dict(),
        }


def export_csv(rows: list[EstimateRow], path: Path | str) -> None:
    """Export estimates to CSV (one line per property, values rounded to cents)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "id",
        "type",
        "neighborhood",
        "city",
        "interior_area",
        "ok",
        "min_rent",
        "max_rent",
        "estimated_rent",
        "reason",
        "message",
    ]

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in rows:
            res = r.result
            ok = isinstance(res, RentRange)
            writer.writerow({
                "id": r.row_id,
                "type": r.attributes.property_type,
                "neighborhood": r.attributes.neighborhood,
                "city": r.attributes.city,
                "interior_area": r.attributes.interior_area,
                "ok": ok,
                "min_rent": round(res.min_rent, 2) if ok else "",
                "max_rent": round(res.max_rent, 2) if ok else "",
                "estimated_rent": round(res.estimated_rent, 2) if ok else "",
                "reason": "" if ok else res.reason,
                "message": "" if ok else res.message,
            })


def export_json(rows: list[EstimateRow], path: Path | str) -> None:
    """Export full estimate details (including adjustment breakdown) to JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "run_at": datetime.now(timezone.utc).isoformat(),
        "count": len(rows),
        "results": [r.to_dict() for r in rows],
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
