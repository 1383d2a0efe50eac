"""Interactive estimate session with debounced recomputation.

The calculator is pure; this is the stateful shell around it. Callers push
raw form fields with ``update()`` as the user types and call ``poll()`` from
their event loop. A new estimate is computed only after the input has been
stable for ``debounce_seconds``.

No CLI command drives a session; it is the library entry point for
interactive front ends::

    session = EstimateSession.from_config(RentEstimator(config=cfg), cfg)
    session.update(type="apartment", neighborhood="Savassi", interior_area="80")
    ...
    result = session.poll()  # None until the input settles
"""

from __future__ import annotations

import time
from typing import Any, Callable

from .config import get_debounce_seconds
from .estimation import RentEstimator
from .models import MISSING_REQUIRED_INPUT, EstimationResult
from .parsing import attributes_from_form


class EstimateSession:
    """Holds form state and the latest estimate for one interactive user."""

    def __init__(
        self,
        estimator: RentEstimator,
        debounce_seconds: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.estimator = estimator
        self.debounce_seconds = debounce_seconds
        self._clock = clock
        self.fields: dict[str, Any] = {}
        self.result: EstimationResult | None = None
        self._changed_at: float | None = None

    @classmethod
    def from_config(cls, estimator: RentEstimator, config: dict) -> EstimateSession:
        """Session using the configured debounce interval."""
        return cls(estimator, debounce_seconds=get_debounce_seconds(config))

    @property
    def pending(self) -> bool:
        """True when input changed since the last computation."""
        return self._changed_at is not None

    def update(self, **fields: Any) -> None:
        """Merge changed form fields and restart the debounce interval."""
        self.fields.update(fields)
        self._changed_at = self._clock()

    def poll(self) -> EstimationResult | None:
        """Recompute if the input has been stable long enough.

        Returns the new result, or None when nothing was due or the input
        is still incomplete.
        """
        if self._changed_at is None:
            return None
        if self._clock() - self._changed_at < self.debounce_seconds:
            return None
        return self.flush()

    def flush(self) -> EstimationResult | None:
        """Recompute immediately from the current fields."""
        self._changed_at = None
        attrs = attributes_from_form(self.fields, city=self.estimator.reference_city)
        result = self.estimator.estimate(attrs)
        # Not computable yet: clear the previous estimate rather than show a stale one.
        if not result.ok and result.reason == MISSING_REQUIRED_INPUT:
            self.result = None
            return None
        self.result = result
        return result
