"""Forecast engine: production fit, held-out validation, and summary.

Orchestrates:
- Sorting and validating the weekly history
- Fitting the seasonal trend model on the full history
- Projecting future weeks with a flat confidence band
- Refitting on the head of history and scoring the tail

CRITICAL: Pure computation. No I/O and no shared mutable state, so one
engine can serve concurrent callers.
"""

from __future__ import annotations

import math
import time
from collections.abc import Iterable, Sequence
from datetime import timedelta
from typing import Any

import numpy as np

from storepulse.core.exceptions import InsufficientHistoryError, InvalidInputError
from storepulse.core.logging import get_logger
from storepulse.features.forecasting.metrics import MetricsCalculator
from storepulse.features.forecasting.model import SeasonalTrendForecaster, is_holiday_week
from storepulse.features.forecasting.schemas import (
    ChartPoint,
    ForecastConfig,
    ForecastMetrics,
    ForecastOutput,
    ForecastSummary,
    MethodologyInfo,
    PredictionPoint,
    TrainingPeriod,
    TrendDirection,
    ValidationStatus,
    WeeklyPoint,
)

logger = get_logger(__name__)

MODEL_NAME = "Simplified Holt-Winters with Linear Regression"
SUMMARY_WEEKS = 4


def to_weekly_points(weekly: Iterable[Any]) -> list[WeeklyPoint]:
    """Coerce weekly aggregates (or any object with date/total_sales/is_holiday).

    Returns:
        Points sorted by date ascending.
    """
    points = [
        w if isinstance(w, WeeklyPoint) else WeeklyPoint.model_validate(w, from_attributes=True)
        for w in weekly
    ]
    return sorted(points, key=lambda p: p.date)


class ForecastEngine:
    """Fit, project and validate weekly sales forecasts.

    Attributes:
        config: Forecast configuration shared by every call.
    """

    def __init__(self, config: ForecastConfig | None = None) -> None:
        self.config = config or ForecastConfig()
        self._metrics = MetricsCalculator()

    def forecast(self, weekly: Iterable[Any], horizon: int | None = None) -> ForecastOutput:
        """Forecast the next weeks from historical weekly totals.

        Args:
            weekly: Historical weekly totals in any order.
            horizon: Weeks to predict (defaults to config.horizon_weeks).

        Returns:
            Predictions, validation metrics, methodology and summary.

        Raises:
            InvalidInputError: If horizon is below 1.
            InsufficientHistoryError: If fewer than 2 weekly points are given.
        """
        horizon = self.config.horizon_weeks if horizon is None else horizon
        if horizon < 1:
            raise InvalidInputError(
                message=f"Forecast horizon must be at least 1, got {horizon}",
                details={"horizon": horizon},
            )

        points = to_weekly_points(weekly)
        if len(points) < 2:
            raise InsufficientHistoryError(
                message=f"Forecast needs at least 2 weekly points, got {len(points)}",
                details={"n_points": len(points)},
            )

        start_time = time.perf_counter()
        logger.info(
            "forecasting.forecast_started",
            n_points=len(points),
            horizon=horizon,
            train_start=str(points[0].date),
            train_end=str(points[-1].date),
        )

        model = SeasonalTrendForecaster(self.config).fit(points)
        predictions = self._project(model, points, horizon)
        metrics = self._validate(points)
        status = (
            ValidationStatus.OK if metrics is not None else ValidationStatus.INSUFFICIENT_HISTORY
        )

        if metrics is None:
            logger.warning(
                "forecasting.validation_skipped",
                n_points=len(points),
                validation_split=self.config.validation_split,
            )

        output = ForecastOutput(
            predictions=predictions,
            metrics=metrics,
            validation_status=status,
            methodology=self._methodology(points),
            summary=self._summarize(points, predictions),
            components=model.components,
        )

        logger.info(
            "forecasting.forecast_completed",
            n_points=len(points),
            horizon=horizon,
            validation_status=status.value,
            mape=metrics.mape if metrics is not None else None,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return output

    def _project(
        self,
        model: SeasonalTrendForecaster,
        points: Sequence[WeeklyPoint],
        horizon: int,
    ) -> list[PredictionPoint]:
        last_date = points[-1].date
        band = self.config.confidence_band
        predictions: list[PredictionPoint] = []

        for week in range(1, horizon + 1):
            target = last_date + timedelta(days=7 * week)
            holiday = is_holiday_week(target, self.config.holiday_weeks)
            value = model.predict_week(target, len(points) + week, holiday)
            margin = value * band
            predictions.append(
                PredictionPoint(
                    date=target,
                    predicted_sales=value,
                    lower_bound=value - margin,
                    upper_bound=value + margin,
                    is_holiday=holiday,
                    week_number=week,
                )
            )
        return predictions

    def _validate(self, points: Sequence[WeeklyPoint]) -> ForecastMetrics | None:
        """Refit on the head of history and score the held-out tail.

        Returns None when the head has fewer than 2 points or the tail is empty.
        """
        split = math.floor(len(points) * self.config.validation_split)
        head, tail = points[:split], points[split:]
        if len(head) < 2 or not tail:
            return None

        model = SeasonalTrendForecaster(self.config).fit(head)
        predicted = np.array(
            [model.predict_week(p.date, len(head) + i, p.is_holiday) for i, p in enumerate(tail)],
            dtype=np.float64,
        )
        actuals = np.array([p.total_sales for p in tail], dtype=np.float64)
        return self._metrics.calculate_all(actuals, predicted)

    def _summarize(
        self,
        points: Sequence[WeeklyPoint],
        predictions: Sequence[PredictionPoint],
    ) -> ForecastSummary:
        upcoming = predictions[:SUMMARY_WEEKS]
        next_month = sum(p.predicted_sales for p in upcoming)
        avg_weekly = next_month / len(upcoming)

        recent_avg = float(np.mean([p.total_sales for p in points[-SUMMARY_WEEKS:]]))
        trend_percent = (avg_weekly - recent_avg) / recent_avg * 100.0 if recent_avg != 0 else 0.0

        band = self.config.trend_band_pct
        if trend_percent > band:
            direction = TrendDirection.UP
        elif trend_percent < -band:
            direction = TrendDirection.DOWN
        else:
            direction = TrendDirection.STABLE

        return ForecastSummary(
            next_month_sales=next_month,
            trend=direction,
            trend_percent=trend_percent,
            avg_weekly_sales=avg_weekly,
        )

    def _methodology(self, points: Sequence[WeeklyPoint]) -> MethodologyInfo:
        return MethodologyInfo(
            model_name=MODEL_NAME,
            variables=[
                "Historical weekly sales",
                "Monthly seasonal indices",
                "Holiday impact factor",
                "Linear trend",
            ],
            training_period=TrainingPeriod(start=points[0].date, end=points[-1].date),
            data_points=len(points),
            assumptions=[
                "Monthly seasonality is constant",
                "Trend is linear over time",
                "Holiday impact is proportional to the historical average",
                "Past patterns repeat in the future",
            ],
            limitations=[
                "Ignores macroeconomic factors (inflation, unemployment)",
                "Ignores external events (competition, promotions)",
                "Assumes continuous operations (no closures)",
                f"Confidence band is a flat +/-{self.config.confidence_band:.0%}, "
                "not derived from residuals",
                "Accuracy decreases with the forecast horizon",
            ],
        )


def chart_series(
    weekly: Iterable[Any],
    predictions: Sequence[PredictionPoint],
    last_n_weeks: int = 52,
) -> list[ChartPoint]:
    """Join the most recent history with the forecast for plotting.

    Args:
        weekly: Historical weekly totals in any order.
        predictions: Output of ForecastEngine.forecast.
        last_n_weeks: How many historical weeks to keep.

    Returns:
        Historical points followed by forecast points.
    """
    if last_n_weeks < 0:
        raise InvalidInputError(
            message=f"last_n_weeks must be non-negative, got {last_n_weeks}",
            details={"last_n_weeks": last_n_weeks},
        )

    points = to_weekly_points(weekly)
    history = points[-last_n_weeks:] if last_n_weeks else []
    series = [
        ChartPoint(date=p.date, actual=p.total_sales, is_holiday=p.is_holiday) for p in history
    ]
    series.extend(
        ChartPoint(
            date=p.date,
            predicted=p.predicted_sales,
            lower_bound=p.lower_bound,
            upper_bound=p.upper_bound,
            is_holiday=p.is_holiday,
        )
        for p in predictions
    )
    return series
