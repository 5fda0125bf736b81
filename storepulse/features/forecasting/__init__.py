"""Forecasting module: seasonal trend model with held-out validation."""

from storepulse.features.forecasting.metrics import MetricResult, MetricsCalculator
from storepulse.features.forecasting.model import (
    SeasonalTrendForecaster,
    holiday_factor,
    is_holiday_week,
    linear_trend,
    seasonal_indices,
    week_of_month,
)
from storepulse.features.forecasting.schemas import (
    ChartPoint,
    ForecastConfig,
    ForecastMetrics,
    ForecastOutput,
    ForecastSummary,
    MethodologyInfo,
    ModelComponents,
    PredictionPoint,
    TrainingPeriod,
    TrendDirection,
    ValidationStatus,
    WeeklyPoint,
)
from storepulse.features.forecasting.service import (
    ForecastEngine,
    chart_series,
    to_weekly_points,
)

__all__ = [
    "ChartPoint",
    "ForecastConfig",
    "ForecastEngine",
    "ForecastMetrics",
    "ForecastOutput",
    "ForecastSummary",
    "MethodologyInfo",
    "MetricResult",
    "MetricsCalculator",
    "ModelComponents",
    "PredictionPoint",
    "SeasonalTrendForecaster",
    "TrainingPeriod",
    "TrendDirection",
    "ValidationStatus",
    "WeeklyPoint",
    "chart_series",
    "holiday_factor",
    "is_holiday_week",
    "linear_trend",
    "seasonal_indices",
    "to_weekly_points",
    "week_of_month",
]
