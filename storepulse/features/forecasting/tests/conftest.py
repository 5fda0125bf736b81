"""Feature-specific test fixtures for forecasting module."""

from collections.abc import Callable, Sequence
from datetime import date, timedelta

import pytest

from storepulse.features.forecasting.schemas import ForecastConfig, WeeklyPoint

START = date(2011, 3, 4)


@pytest.fixture
def make_points() -> Callable[..., list[WeeklyPoint]]:
    """Factory for consecutive weekly points starting 2011-03-04."""

    def _make(
        totals: Sequence[float],
        holidays: Sequence[int] = (),
        start: date = START,
    ) -> list[WeeklyPoint]:
        return [
            WeeklyPoint(
                date=start + timedelta(weeks=i),
                total_sales=t,
                is_holiday=i in holidays,
            )
            for i, t in enumerate(totals)
        ]

    return _make


@pytest.fixture
def flat_points(make_points) -> list[WeeklyPoint]:
    """Eight constant weeks of 1000 (no holidays, spring only)."""
    return make_points([1000.0] * 8)


@pytest.fixture
def trending_points(make_points) -> list[WeeklyPoint]:
    """Forty weeks growing by 25 a week with two holiday weeks."""
    return make_points([2000.0 + 25 * i for i in range(40)], holidays=(10, 30))


@pytest.fixture
def sample_forecast_config() -> ForecastConfig:
    """Short-horizon configuration for tests."""
    return ForecastConfig(horizon_weeks=6)
