"""Rent estimation: pure calculator and the engine around it."""

from .calculator import compute_adjustments, estimate, find_neighborhood, index_parameters
from .engine import RentEstimator

__all__ = [
    "RentEstimator",
    "compute_adjustments",
    "estimate",
    "find_neighborhood",
    "index_parameters",
]
