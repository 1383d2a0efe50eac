"""Rent estimation from property attributes and neighborhood parameters."""

from __future__ import annotations

import math
from datetime import date
from typing import Iterable

from ..models import (
    EXTERIOR_AREA_TYPE,
    MISSING_REQUIRED_INPUT,
    UNKNOWN_NEIGHBORHOOD,
    UNKNOWN_PROPERTY_TYPE,
    EstimationFailure,
    EstimationResult,
    EstimationSettings,
    NeighborhoodParameters,
    PropertyAttributes,
    RentRange,
    TypeParameters,
)

_DEFAULT_SETTINGS = EstimationSettings()


def _key(value: str | None) -> str:
    """Normalize a lookup key (case-insensitive, surrounding whitespace ignored)."""
    return (value or "").strip().lower()


def find_neighborhood(
    table: Iterable[NeighborhoodParameters],
    neighborhood: str,
    city: str,
) -> NeighborhoodParameters | None:
    """Return the first entry matching ``(neighborhood, city)``, or None."""
    hood_key = _key(neighborhood)
    city_key = _key(city)
    for entry in table:
        if _key(entry.neighborhood) == hood_key and _key(entry.city) == city_key:
            return entry
    return None


def index_parameters(
    table: Iterable[NeighborhoodParameters],
) -> dict[tuple[str, str], NeighborhoodParameters]:
    """Build a ``(city, neighborhood) -> entry`` map. First entry wins on duplicates."""
    index: dict[tuple[str, str], NeighborhoodParameters] = {}
    for entry in table:
        index.setdefault((_key(entry.city), _key(entry.neighborhood)), entry)
    return index


def _has_required_input(attrs: PropertyAttributes) -> bool:
    area = attrs.interior_area
    if not _key(attrs.property_type) or not _key(attrs.neighborhood):
        return False
    if area is None or isinstance(area, bool):
        return False
    try:
        area = float(area)
    except (TypeError, ValueError):
        return False
    return math.isfinite(area) and area > 0


def _age_adjustment(
    year_built: int | None,
    base: float,
    current_year: int,
    settings: EstimationSettings,
) -> float:
    """Bonus for recent buildings, penalty for old ones; 0 outside the valid year range."""
    if year_built is None or isinstance(year_built, bool):
        return 0.0
    try:
        year = int(year_built)
    except (TypeError, ValueError):
        return 0.0
    if not (settings.min_year_built < year <= current_year):
        return 0.0
    age = current_year - year
    if age < settings.new_building_max_age:
        return settings.new_building_bonus * base
    if age > settings.old_building_min_age:
        return -settings.old_building_penalty * base
    return 0.0


def compute_adjustments(
    attrs: PropertyAttributes,
    params: TypeParameters,
    base: float,
    current_year: int,
    settings: EstimationSettings = _DEFAULT_SETTINGS,
) -> dict[str, float]:
    """Compute each applicable adjustment (name -> amount, in application order).

    An adjustment is applied only when the property has the attribute *and*
    the parameters define a coefficient for it.
    """
    adj = params.adjustments
    applied: dict[str, float] = {}

    if attrs.bedrooms > 0 and adj.bedrooms is not None:
        applied["bedrooms"] = attrs.bedrooms * adj.bedrooms
    if attrs.suites > 0 and adj.suites is not None:
        applied["suites"] = attrs.suites * adj.suites
    if attrs.parking_spots > 0 and adj.parking_spots is not None:
        applied["parking_spots"] = attrs.parking_spots * adj.parking_spots

    # Gated on type only: a zero exterior area still records a 0 adjustment.
    if attrs.property_type == EXTERIOR_AREA_TYPE and adj.exterior_area_per_sqm is not None:
        applied["exterior_area"] = (attrs.exterior_area or 0.0) * adj.exterior_area_per_sqm

    if attrs.conservation_state and adj.conservation_state:
        fraction = adj.conservation_state.get(attrs.conservation_state)
        if fraction:
            applied["conservation_state"] = base * fraction

    if attrs.has_pool and adj.pool is not None:
        applied["pool"] = adj.pool
    if attrs.has_gym and adj.gym is not None:
        applied["gym"] = adj.gym

    age = _age_adjustment(attrs.year_built, base, current_year, settings)
    if age:
        applied["building_age"] = age

    return applied


def estimate(
    attrs: PropertyAttributes,
    table: Iterable[NeighborhoodParameters],
    settings: EstimationSettings | None = None,
    current_year: int | None = None,
) -> EstimationResult:
    """Estimate the monthly rent range for a property.

    Preconditions are checked in order and short-circuit:

    1. type, neighborhood and a positive, finite interior area are required
       (``missing_required_input``);
    2. the ``(neighborhood, city)`` pair must exist in *table*
       (``unknown_neighborhood``);
    3. the neighborhood must carry parameters for the type
       (``unknown_property_type``).

    Otherwise ``base = interior_area * avg_price_per_sqm``, adjustments are
    added, the total is floored at 0 and a symmetric margin gives the range.
    Values are returned unrounded.
    """
    settings = settings or _DEFAULT_SETTINGS
    if current_year is None:
        current_year = date.today().year

    if not _has_required_input(attrs):
        return EstimationFailure(
            reason=MISSING_REQUIRED_INPUT,
            message="Enter the property type, neighborhood and interior area to see an estimate.",
        )

    entry = find_neighborhood(table, attrs.neighborhood, attrs.city)
    if entry is None:
        return EstimationFailure(
            reason=UNKNOWN_NEIGHBORHOOD,
            message=f"No rent data for neighborhood '{attrs.neighborhood}' in {attrs.city or 'the reference city'}.",
        )

    params = entry.types.get(attrs.property_type)
    if params is None:
        return EstimationFailure(
            reason=UNKNOWN_PROPERTY_TYPE,
            message=(
                f"No rent data for property type '{attrs.property_type}' "
                f"in neighborhood '{attrs.neighborhood}'."
            ),
        )

    base = float(attrs.interior_area) * params.avg_price_per_sqm
    adjustments = compute_adjustments(attrs, params, base, current_year, settings)
    estimated = max(0.0, base + sum(adjustments.values()))

    return RentRange(
        min_rent=estimated * (1 - settings.margin),
        max_rent=estimated * (1 + settings.margin),
        estimated_rent=estimated,
        base_value=base,
        adjustments=adjustments,
    )
