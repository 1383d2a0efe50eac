"""Data models for property attributes, market parameters and estimates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

# Property type catalogue (key -> display label).
PROPERTY_TYPES: dict[str, str] = {
    "apartment": "Apartment",
    "apartment-private-area": "Apartment with private area",
    "house-condo": "House in gated condominium",
    "house-residential": "Residential house",
    "penthouse": "Penthouse",
    "flat-hotel": "Flat / Hotel / Apart",
}

CONSERVATION_STATES: dict[str, str] = {
    "excellent": "Excellent",
    "good": "Good",
    "regular": "Regular",
    "needs-renovation": "Needs renovation",
}

# Only this type prices the exterior area.
EXTERIOR_AREA_TYPE = "house-residential"

# Failure reasons
MISSING_REQUIRED_INPUT = "missing_required_input"
UNKNOWN_NEIGHBORHOOD = "unknown_neighborhood"
UNKNOWN_PROPERTY_TYPE = "unknown_property_type"
DATA_SOURCE_UNAVAILABLE = "data_source_unavailable"


@dataclass(frozen=True)
class PropertyAttributes:
    """Attributes of the property being priced."""

    property_type: str
    neighborhood: str
    city: str = ""
    interior_area: float | None = None
    exterior_area: float = 0.0
    bedrooms: int = 0
    suites: int = 0
    parking_spots: int = 0
    conservation_state: str | None = None
    has_pool: bool = False
    has_gym: bool = False
    year_built: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.property_type,
            "neighborhood": self.neighborhood,
            "city": self.city,
            "interior_area": self.interior_area,
            "exterior_area": self.exterior_area,
            "bedrooms": self.bedrooms,
            "suites": self.suites,
            "parking_spots": self.parking_spots,
            "conservation_state": self.conservation_state,
            "has_pool": self.has_pool,
            "has_gym": self.has_gym,
            "year_built": self.year_built,
        }


@dataclass(frozen=True)
class TypeAdjustments:
    """Per-type adjustment coefficients. ``None`` means not defined."""

    bedrooms: float | None = None
    suites: float | None = None
    parking_spots: float | None = None
    exterior_area_per_sqm: float | None = None
    conservation_state: Mapping[str, float] | None = None
    pool: float | None = None
    gym: float | None = None


@dataclass(frozen=True)
class TypeParameters:
    """Pricing parameters for one property type in one neighborhood."""

    avg_price_per_sqm: float
    adjustments: TypeAdjustments = field(default_factory=TypeAdjustments)


@dataclass(frozen=True)
class NeighborhoodParameters:
    """Market parameters for a (neighborhood, city) pair."""

    neighborhood: str
    city: str
    types: Mapping[str, TypeParameters] = field(default_factory=dict)


@dataclass(frozen=True)
class EstimationSettings:
    """Margin and building-age rules (from config or defaults)."""

    margin: float = 0.10
    min_year_built: int = 1900
    new_building_max_age: int = 5
    new_building_bonus: float = 0.05
    old_building_min_age: int = 30
    old_building_penalty: float = 0.10


@dataclass(frozen=True)
class RentRange:
    """Successful estimate: a rent range around the estimated value."""

    min_rent: float
    max_rent: float
    estimated_rent: float
    base_value: float
    adjustments: dict[str, float] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": True,
            "min_rent": self.min_rent,
            "max_rent": self.max_rent,
            "estimated_rent": self.estimated_rent,
            "base_value": self.base_value,
            "adjustments": dict(self.adjustments),
        }


@dataclass(frozen=True)
class EstimationFailure:
    """Expected, non-fatal reason why no estimate could be produced."""

    reason: str
    message: str

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": False,
            "reason": self.reason,
            "message": self.message,
        }


EstimationResult = Union[RentRange, EstimationFailure]
