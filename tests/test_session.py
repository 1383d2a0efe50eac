"""Tests for the debounced interactive session."""

import pytest

from rent_estimate.models import UNKNOWN_NEIGHBORHOOD
from rent_estimate.session import EstimateSession


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(estimator, clock) -> EstimateSession:
    return EstimateSession(estimator, debounce_seconds=0.5, clock=clock)


class TestEstimateSession:
    """Recompute only after input is stable."""

    def test_waits_for_debounce(self, session, clock) -> None:
        session.update(type="apartment", neighborhood="Centro", interior_area="80", bedrooms="2")
        assert session.pending
        clock.now += 0.25
        assert session.poll() is None
        assert session.result is None
        clock.now += 0.25
        result = session.poll()
        assert result is not None and result.ok
        assert result.min_rent == pytest.approx(1530)
        assert session.result is result
        assert not session.pending

    def test_typing_restarts_interval(self, session, clock) -> None:
        session.update(type="apartment", neighborhood="Centro", interior_area="8")
        clock.now += 0.25
        session.update(interior_area="80")
        clock.now += 0.25
        assert session.poll() is None
        clock.now += 0.25
        assert session.poll().ok

    def test_nothing_pending(self, session) -> None:
        assert session.poll() is None

    def test_incomplete_input_clears_result(self, session) -> None:
        session.update(type="apartment", neighborhood="Centro", interior_area="80")
        assert session.flush().ok
        session.update(interior_area="")
        assert session.flush() is None
        assert session.result is None

    def test_failure_message_kept(self, session) -> None:
        session.update(type="apartment", neighborhood="Lourdes", interior_area="80")
        result = session.flush()
        assert result.reason == UNKNOWN_NEIGHBORHOOD
        assert session.result is result

    def test_malformed_text_is_forgiven(self, session) -> None:
        session.update(type="apartment", neighborhood="Centro", interior_area="80", bedrooms="two")
        result = session.flush()
        assert result.adjustments == {}


def test_from_config(estimator) -> None:
    session = EstimateSession.from_config(estimator, {"session": {"debounce_ms": 250}})
    assert session.debounce_seconds == 0.25
