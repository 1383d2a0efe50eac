"""Catalogue filters for city, property type and neighborhood text."""

from __future__ import annotations

from typing import Iterable

from .models import NeighborhoodParameters


def filter_parameters(
    table: Iterable[NeighborhoodParameters],
    city: str | None = None,
    property_type: str | None = None,
    query: str | None = None,
) -> list[NeighborhoodParameters]:
    """
    Filter catalogue entries.
    - City must match (case-insensitive) when given
    - Entry must carry parameters for property_type when given
    - Neighborhood must contain query (case-insensitive) when given
    """
    result = []
    city_key = city.strip().lower() if city else None
    needle = query.strip().lower() if query else None
    for entry in table:
        if city_key and entry.city.strip().lower() != city_key:
            continue
        if property_type and property_type not in entry.types:
            continue
        if needle and needle not in entry.neighborhood.lower():
            continue
        result.append(entry)
    return result
