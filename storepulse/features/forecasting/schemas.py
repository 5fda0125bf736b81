"""Pydantic schemas for forecast configuration and output.

ForecastConfig is immutable (frozen=True) so one configuration can be shared
across concurrent forecast calls.
"""

from __future__ import annotations

from datetime import date as date_type
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storepulse.core import constants
from storepulse.core.config import Settings

# =============================================================================
# Configuration
# =============================================================================


class ForecastConfig(BaseModel):
    """Tunable constants of the trend + seasonal + holiday model.

    Attributes:
        horizon_weeks: Number of future weeks to predict.
        validation_split: Fraction of history used to refit before validating.
        base_window: Number of most recent weeks averaged into the base level.
        base_weight: Weight of the seasonal base; the trend gets 1 - base_weight.
        confidence_band: Half-width of the flat prediction band (0.10 = +/-10%).
        default_holiday_factor: Holiday multiplier when a week class is empty.
        trend_band_pct: Month-over-month change needed to label up/down.
        holiday_weeks: (month, week-of-month) pairs treated as holiday weeks.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    horizon_weeks: int = Field(default=constants.FORECAST_HORIZON_WEEKS, ge=1, le=104)
    validation_split: float = Field(default=constants.VALIDATION_SPLIT, gt=0, lt=1)
    base_window: int = Field(default=constants.BASE_LEVEL_WINDOW, ge=1)
    base_weight: float = Field(default=constants.BASE_WEIGHT, ge=0, le=1)
    confidence_band: float = Field(default=constants.CONFIDENCE_BAND, ge=0, lt=1)
    default_holiday_factor: float = Field(default=constants.DEFAULT_HOLIDAY_FACTOR, gt=0)
    trend_band_pct: float = Field(default=constants.TREND_LABEL_BAND_PCT, ge=0)
    holiday_weeks: tuple[tuple[int, int], ...] = Field(default=constants.HOLIDAY_WEEKS)

    @field_validator("holiday_weeks")
    @classmethod
    def validate_holiday_weeks(cls, v: tuple[tuple[int, int], ...]) -> tuple[tuple[int, int], ...]:
        """Ensure every entry is a valid (month, week-of-month) pair."""
        for month, week in v:
            if not 1 <= month <= 12:
                raise ValueError(f"Invalid month {month} in holiday_weeks")
            if not 1 <= week <= 5:
                raise ValueError(f"Invalid week-of-month {week} in holiday_weeks")
        return v

    @property
    def trend_weight(self) -> float:
        """Weight of the linear trend component."""
        return 1.0 - self.base_weight

    @classmethod
    def from_settings(cls, settings: Settings) -> ForecastConfig:
        """Build a config from application settings."""
        return cls(
            horizon_weeks=settings.forecast_horizon_weeks,
            validation_split=settings.forecast_validation_split,
            base_window=settings.forecast_base_window,
            base_weight=settings.forecast_base_weight,
            confidence_band=settings.forecast_confidence_band,
            default_holiday_factor=settings.forecast_default_holiday_factor,
            trend_band_pct=settings.forecast_trend_band_pct,
        )


# =============================================================================
# Input
# =============================================================================


class WeeklyPoint(BaseModel):
    """One historical weekly total fed to the forecast."""

    model_config = ConfigDict(frozen=True)

    date: date_type
    total_sales: float
    is_holiday: bool = False


# =============================================================================
# Output
# =============================================================================


class TrendDirection(str, Enum):
    """Direction of the projected month versus the last historical month."""

    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class ValidationStatus(str, Enum):
    """Whether held-out validation could run."""

    OK = "ok"
    INSUFFICIENT_HISTORY = "insufficient_history"


class PredictionPoint(BaseModel):
    """Forecast for one future week."""

    model_config = ConfigDict(frozen=True)

    date: date_type
    predicted_sales: float
    lower_bound: float
    upper_bound: float
    is_holiday: bool
    week_number: int = Field(..., ge=1, description="1-based, sequential")


class ForecastMetrics(BaseModel):
    """Accuracy on the held-out tail of history."""

    model_config = ConfigDict(frozen=True)

    mae: float = Field(..., ge=0, description="Mean absolute error")
    mape: float = Field(
        ..., ge=0, description="Mean absolute percentage error (zero actuals excluded)"
    )
    r2: float = Field(..., ge=0, le=1, description="Coefficient of determination, floored at 0")
    confidence_score: float = Field(..., ge=0, le=100, description="clamp(100 - MAPE, 0, 100)")
    n_validation: int = Field(..., ge=1)
    warnings: list[str] = Field(
        default_factory=list, description="Edge cases hit while scoring, e.g. excluded zeros"
    )


class TrainingPeriod(BaseModel):
    """Date range of the history used for fitting."""

    start: date_type
    end: date_type


class MethodologyInfo(BaseModel):
    """Human-readable description of the model."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    variables: list[str]
    training_period: TrainingPeriod
    data_points: int
    assumptions: list[str]
    limitations: list[str]


class ForecastSummary(BaseModel):
    """Headline numbers for the next month."""

    next_month_sales: float = Field(..., description="Sum of the first 4 predicted weeks")
    trend: TrendDirection
    trend_percent: float
    avg_weekly_sales: float


class ModelComponents(BaseModel):
    """Fitted parameters of the production model."""

    model_config = ConfigDict(frozen=True)

    seasonal_indices: dict[int, float]
    holiday_factor: float
    slope: float
    intercept: float
    base_level: float
    n_observations: int


class ForecastOutput(BaseModel):
    """Full forecast result."""

    predictions: list[PredictionPoint]
    metrics: ForecastMetrics | None = Field(
        None, description="Null when history is too short to validate"
    )
    validation_status: ValidationStatus
    methodology: MethodologyInfo
    summary: ForecastSummary
    components: ModelComponents


class ChartPoint(BaseModel):
    """One point of the combined history + forecast series.

    Historical points carry ``actual``; forecast points carry the prediction
    and its bounds.
    """

    model_config = ConfigDict(frozen=True)

    date: date_type
    actual: float | None = None
    predicted: float | None = None
    lower_bound: float | None = None
    upper_bound: float | None = None
    is_holiday: bool = False
