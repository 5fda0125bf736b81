"""Trend + seasonal + holiday forecaster.

Interface follows the scikit-learn style:
- fit(points) -> self
- predict_week(target_date, index, is_holiday) -> float
- get_params() -> dict

The model is a weighted blend of a seasonal base level and a linear trend.
It is fitted twice per forecast: once on the full history and once on the
head of history for held-out validation.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date as date_type
from typing import Any

import numpy as np
import pandas as pd

from storepulse.core.exceptions import InsufficientHistoryError
from storepulse.features.forecasting.schemas import (
    ForecastConfig,
    ModelComponents,
    WeeklyPoint,
)


def week_of_month(value: date_type) -> int:
    """Approximate week of month: days 1-7 are week 1, 8-14 week 2, ..."""
    return math.ceil(value.day / 7)


def is_holiday_week(value: date_type, holiday_weeks: Sequence[tuple[int, int]]) -> bool:
    """Check whether a date falls on one of the approximate holiday weeks."""
    return (value.month, week_of_month(value)) in holiday_weeks


def seasonal_indices(points: Sequence[WeeklyPoint]) -> dict[int, float]:
    """Monthly index = month's average weekly total / overall average.

    Months absent from history get 1.0. When the overall average is zero
    every month gets 1.0.
    """
    indices = dict.fromkeys(range(1, 13), 1.0)
    if not points:
        return indices

    totals = pd.Series(
        [p.total_sales for p in points],
        index=pd.Index([p.date.month for p in points], name="month"),
    )
    overall = float(totals.mean())
    if overall == 0:
        return indices
    monthly = totals.groupby(level="month").mean() / overall
    indices.update({int(month): float(index) for month, index in monthly.items()})
    return indices


def holiday_factor(points: Sequence[WeeklyPoint], default: float) -> float:
    """Ratio of average holiday-week total to average non-holiday total."""
    holiday = [p.total_sales for p in points if p.is_holiday]
    regular = [p.total_sales for p in points if not p.is_holiday]
    if not holiday or not regular:
        return default

    regular_avg = float(np.mean(regular))
    if regular_avg == 0:
        return default
    return float(np.mean(holiday)) / regular_avg


def linear_trend(values: Sequence[float]) -> tuple[float, float]:
    """Ordinary least squares of value against a zero-based week index.

    Returns:
        Tuple of (slope, intercept).

    Raises:
        InsufficientHistoryError: If fewer than 2 values are given.
    """
    n = len(values)
    if n < 2:
        raise InsufficientHistoryError(
            message=f"Trend regression needs at least 2 points, got {n}",
            details={"n_points": n},
        )

    x = np.arange(n, dtype=np.float64)
    y = np.asarray(values, dtype=np.float64)
    x_mean = x.mean()
    slope = float(np.sum((x - x_mean) * (y - y.mean())) / np.sum((x - x_mean) ** 2))
    intercept = float(y.mean() - slope * x_mean)
    return slope, intercept


class SeasonalTrendForecaster:
    """Blend of a seasonal base level and a linear trend.

    prediction = base_weight * base + (1 - base_weight) * trend, where
    base = level * seasonal[month] * (holiday_factor if holiday else 1)
    and trend = intercept + slope * index.

    Attributes:
        config: Forecast configuration.
    """

    def __init__(self, config: ForecastConfig | None = None) -> None:
        self.config = config or ForecastConfig()
        self._components: ModelComponents | None = None

    def fit(self, points: Sequence[WeeklyPoint]) -> SeasonalTrendForecaster:
        """Fit all components on date-sorted weekly totals.

        Args:
            points: Historical weekly totals sorted by date ascending.

        Returns:
            self (for method chaining).

        Raises:
            InsufficientHistoryError: If fewer than 2 points are given.
        """
        values = [p.total_sales for p in points]
        slope, intercept = linear_trend(values)
        window = values[-self.config.base_window :]

        self._components = ModelComponents(
            seasonal_indices=seasonal_indices(points),
            holiday_factor=holiday_factor(points, self.config.default_holiday_factor),
            slope=slope,
            intercept=intercept,
            base_level=float(np.mean(window)),
            n_observations=len(values),
        )
        return self

    @property
    def is_fitted(self) -> bool:
        """Check if the model has been fitted."""
        return self._components is not None

    @property
    def components(self) -> ModelComponents:
        """Fitted parameters.

        Raises:
            RuntimeError: If the model has not been fitted.
        """
        if self._components is None:
            raise RuntimeError("Model must be fitted before use")
        return self._components

    def predict_week(self, target_date: date_type, index: int, is_holiday: bool) -> float:
        """Predict the total for one week.

        Args:
            target_date: Calendar date of the week (drives the seasonal index).
            index: Zero-based trend index of the week.
            is_holiday: Whether the holiday factor applies.

        Returns:
            Point prediction.
        """
        c = self.components
        base = c.base_level * c.seasonal_indices[target_date.month]
        if is_holiday:
            base *= c.holiday_factor
        trend = c.intercept + c.slope * index
        return self.config.base_weight * base + self.config.trend_weight * trend

    def get_params(self) -> dict[str, Any]:
        """Get model parameters."""
        return self.config.model_dump()
