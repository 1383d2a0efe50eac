"""File-backed parameter source (YAML or JSON).

Document layout: either a list of entries or a mapping with a
``neighborhoods`` list. Each entry uses the wire shape::

    neighborhood: Savassi
    city: Belo Horizonte
    types:
      apartment:
        avgPricePerSqm: 52
        adjustments: {bedrooms: 150, conservationState: {good: 0.03}}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..models import NeighborhoodParameters
from .base import DataSourceUnavailable, ParameterSource, SourceResult, parameters_from_dict

logger = logging.getLogger(__name__)


class FileParameterSource(ParameterSource):
    """Reads the neighborhood catalogue from a local YAML/JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @property
    def source_name(self) -> str:
        return f"file:{self.path.name}"

    def _read(self) -> Any:
        if not self.path.exists():
            raise DataSourceUnavailable(f"Parameter file not found: {self.path}")
        try:
            with open(self.path, encoding="utf-8") as f:
                if self.path.suffix.lower() == ".json":
                    return json.load(f)
                return yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise DataSourceUnavailable(f"Could not read {self.path}: {e!s}") from e

    def fetch(self, city: str | None = None) -> SourceResult:
        """Load entries from the file, keeping those in *city* (case-insensitive)."""
        data = self._read()
        items = data.get("neighborhoods") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise DataSourceUnavailable(f"{self.path}: expected a list of neighborhoods")

        city_key = city.strip().lower() if city else None
        entries: list[NeighborhoodParameters] = []
        errors: list[str] = []
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                errors.append(f"entry {i}: not a mapping")
                continue
            try:
                entry = parameters_from_dict(item)
            except (KeyError, TypeError, ValueError) as e:
                errors.append(f"entry {i}: {e!s}")
                continue
            if city_key is None or entry.city.lower() == city_key:
                entries.append(entry)

        for err in errors:
            logger.warning("Skipped parameter %s (%s)", err, self.path)
        logger.debug("Loaded %d neighborhood entries from %s", len(entries), self.path)
        return SourceResult(entries=entries, source=self.source_name, errors=errors)
