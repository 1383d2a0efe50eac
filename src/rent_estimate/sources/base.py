"""Base interface for neighborhood parameter sources."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..models import NeighborhoodParameters, TypeAdjustments, TypeParameters


class DataSourceUnavailable(Exception):
    """The parameter source could not be read at all."""


@dataclass
class SourceResult:
    """Result of a source fetch operation."""

    entries: list[NeighborhoodParameters]
    source: str
    errors: list[str] = field(default_factory=list)


class ParameterSource(ABC):
    """
    Abstract interface for neighborhood parameter data.
    Implementations: YAML/JSON file, in-memory table.
    """

    @abstractmethod
    def fetch(self, city: str | None = None) -> SourceResult:
        """
        Fetch parameter entries, optionally restricted to one city.
        Malformed entries are skipped and reported in ``errors``.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Identifier for this data source."""
        ...


def _finite(num: float, key: str) -> float:
    if not math.isfinite(num):
        raise ValueError(f"adjustment '{key}' must be finite")
    return num


def _optional_float(adj: Mapping[str, Any], key: str) -> float | None:
    val = adj.get(key)
    if val is None:
        return None
    return _finite(float(val), key)


def parameters_from_dict(data: Mapping[str, Any]) -> NeighborhoodParameters:
    """Build a NeighborhoodParameters from its wire shape.

    Raises ValueError (or TypeError/KeyError) for entries that cannot be used.
    """
    neighborhood = str(data.get("neighborhood") or "").strip()
    city = str(data.get("city") or "").strip()
    if not neighborhood or not city:
        raise ValueError("entry needs both 'neighborhood' and 'city'")

    raw_types = data.get("types") or {}
    if not isinstance(raw_types, Mapping):
        raise ValueError(f"{neighborhood}: 'types' must be a mapping")

    types: dict[str, TypeParameters] = {}
    for type_key, raw in raw_types.items():
        if not isinstance(raw, Mapping):
            raise ValueError(f"{neighborhood}/{type_key}: must be a mapping")
        price = float(raw["avgPricePerSqm"])
        if not math.isfinite(price) or price <= 0:
            raise ValueError(f"{neighborhood}/{type_key}: avgPricePerSqm must be positive")
        adj = raw.get("adjustments") or {}
        if not isinstance(adj, Mapping):
            raise ValueError(f"{neighborhood}/{type_key}: 'adjustments' must be a mapping")
        states = adj.get("conservationState")
        types[str(type_key)] = TypeParameters(
            avg_price_per_sqm=price,
            adjustments=TypeAdjustments(
                bedrooms=_optional_float(adj, "bedrooms"),
                suites=_optional_float(adj, "suites"),
                parking_spots=_optional_float(adj, "parkingSpots"),
                exterior_area_per_sqm=_optional_float(adj, "exteriorAreaPerSqm"),
                conservation_state=(
                    {str(k): _finite(float(v), "conservationState") for k, v in states.items()} if isinstance(states, Mapping) else None
                ),
                pool=_optional_float(adj, "pool"),
                gym=_optional_float(adj, "gym"),
            ),
        )
    return NeighborhoodParameters(neighborhood=neighborhood, city=city, types=types)


def parameters_to_dict(entry: NeighborhoodParameters) -> dict[str, Any]:
    """Convert NeighborhoodParameters back to its wire shape (undefined coefficients omitted)."""
    types: dict[str, Any] = {}
    for type_key, params in entry.types.items():
        a = params.adjustments
        adj = {
            "bedrooms": a.bedrooms,
            "suites": a.suites,
            "parkingSpots": a.parking_spots,
            "exteriorAreaPerSqm": a.exterior_area_per_sqm,
            "conservationState": dict(a.conservation_state) if a.conservation_state is not None else None,
            "pool": a.pool,
            "gym": a.gym,
        }
        types[type_key] = {
            "avgPricePerSqm": params.avg_price_per_sqm,
            "adjustments": {k: v for k, v in adj.items() if v is not None},
        }
    return {"neighborhood": entry.neighborhood, "city": entry.city, "types": types}
