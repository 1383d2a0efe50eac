"""Pytest fixtures."""

import pytest

from rent_estimate.models import (
    EstimationSettings,
    NeighborhoodParameters,
    PropertyAttributes,
    TypeAdjustments,
    TypeParameters,
)
from rent_estimate.estimation import RentEstimator
from rent_estimate.sources import StaticParameterSource

CITY = "Belo Horizonte"


@pytest.fixture
def parameter_table() -> list[NeighborhoodParameters]:
    """Small catalogue covering every adjustment kind."""
    return [
        NeighborhoodParameters(
            neighborhood="Centro",
            city=CITY,
            types={
                "apartment": TypeParameters(
                    avg_price_per_sqm=20,
                    adjustments=TypeAdjustments(bedrooms=50),
                ),
            },
        ),
        NeighborhoodParameters(
            neighborhood="Savassi",
            city=CITY,
            types={
                "apartment": TypeParameters(
                    avg_price_per_sqm=50,
                    adjustments=TypeAdjustments(
                        bedrooms=100,
                        suites=200,
                        parking_spots=150,
                        exterior_area_per_sqm=10,
                        conservation_state={"excellent": 0.1, "regular": -0.05, "needs-renovation": -2.0},
                        pool=300,
                        gym=120,
                    ),
                ),
                "house-residential": TypeParameters(
                    avg_price_per_sqm=30,
                    adjustments=TypeAdjustments(exterior_area_per_sqm=5),
                ),
            },
        ),
        NeighborhoodParameters(
            neighborhood="Savassi",
            city="São Paulo",
            types={"apartment": TypeParameters(avg_price_per_sqm=90)},
        ),
    ]


@pytest.fixture
def centro_apartment() -> PropertyAttributes:
    """The 80 m² two-bedroom apartment in Centro."""
    return PropertyAttributes(
        property_type="apartment",
        neighborhood="Centro",
        city=CITY,
        interior_area=80,
        bedrooms=2,
    )


@pytest.fixture
def estimator(parameter_table) -> RentEstimator:
    """Estimator over the in-memory table (no config file needed)."""
    return RentEstimator(
        source=StaticParameterSource(parameter_table),
        settings=EstimationSettings(),
        reference_city=CITY,
    )
