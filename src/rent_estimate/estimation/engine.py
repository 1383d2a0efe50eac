"""Estimator engine: holds a parameter snapshot and fills in the reference city."""

from __future__ import annotations

import dataclasses
import logging
from typing import List

from ..config import (
    get_estimation_settings,
    get_parameters_path,
    get_reference_city,
    load_config,
)
from ..models import (
    DATA_SOURCE_UNAVAILABLE,
    EstimationFailure,
    EstimationResult,
    EstimationSettings,
    NeighborhoodParameters,
    PropertyAttributes,
)
from ..sources import DataSourceUnavailable, FileParameterSource, ParameterSource
from .calculator import estimate, index_parameters

logger = logging.getLogger(__name__)


class RentEstimator:
    """
    Rent estimator over one immutable snapshot of the parameter catalogue.
    The snapshot is loaded lazily on first use and replaced only by ``refresh()``.
    """

    def __init__(
        self,
        source: ParameterSource | None = None,
        settings: EstimationSettings | None = None,
        reference_city: str | None = None,
        config: dict | None = None,
    ) -> None:
        if source is None or settings is None or reference_city is None:
            cfg = config or load_config()
        else:
            cfg = config or {}
        self.reference_city = reference_city or get_reference_city(cfg)
        self.settings = settings or get_estimation_settings(cfg)
        self.source = source or FileParameterSource(get_parameters_path(cfg))
        self._table: tuple[NeighborhoodParameters, ...] | None = None
        self._index: dict = {}
        self._unavailable: str | None = None
        self.load_errors: list[str] = []

    @property
    def loaded(self) -> bool:
        return self._table is not None or self._unavailable is not None

    @property
    def table(self) -> tuple[NeighborhoodParameters, ...]:
        """Current snapshot (empty when the source was unavailable)."""
        self._ensure_loaded()
        return self._table or ()

    def refresh(self) -> None:
        """Reload the snapshot from the source."""
        try:
            result = self.source.fetch(self.reference_city)
        except DataSourceUnavailable as e:
            logger.warning("Parameter source unavailable: %s", e)
            self._table = None
            self._index = {}
            self._unavailable = str(e)
            self.load_errors = [str(e)]
            return
        table = tuple(result.entries)
        self._index = index_parameters(table)
        self._table = table
        self._unavailable = None
        self.load_errors = list(result.errors)
        logger.debug(
            "Loaded %d neighborhoods for %s from %s",
            len(table), self.reference_city, result.source,
        )

    def _ensure_loaded(self) -> None:
        if not self.loaded:
            self.refresh()

    def estimate(self, attrs: PropertyAttributes, current_year: int | None = None) -> EstimationResult:
        """Estimate one property. A blank city means the reference city."""
        self._ensure_loaded()
        if self._unavailable is not None:
            return EstimationFailure(
                reason=DATA_SOURCE_UNAVAILABLE,
                message="Could not load the data for the calculator. Please try again later.",
            )
        if not (attrs.city or "").strip():
            attrs = dataclasses.replace(attrs, city=self.reference_city)
        key = (attrs.city.strip().lower(), (attrs.neighborhood or "").strip().lower())
        entry = self._index.get(key)
        # Keyed lookup narrows the table to one entry; the calculator still owns the rules.
        table = (entry,) if entry is not None else self._table
        return estimate(attrs, table, self.settings, current_year)

    def estimate_many(
        self,
        properties: List[PropertyAttributes],
        current_year: int | None = None,
    ) -> List[EstimationResult]:
        """Estimate multiple properties."""
        return [self.estimate(p, current_year) for p in properties]
