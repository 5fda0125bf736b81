"""Pydantic schemas for the dashboard insights snapshot."""

from datetime import date as date_type

from pydantic import BaseModel, ConfigDict, Field

from storepulse.features.aggregation.schemas import (
    DepartmentAggregate,
    MonthlyAggregate,
    StoreAggregate,
    StoreTypeAggregate,
    WeeklyAggregate,
    WeeklyFeatureAggregate,
)
from storepulse.features.alerts.schemas import DropAlert
from storepulse.features.anomalies.schemas import AnomalyReport, WeeklyAnomalyReport
from storepulse.features.forecasting.schemas import ForecastOutput
from storepulse.features.volatility.schemas import RiskCounts, StoreVolatility


class HolidayImpact(BaseModel):
    """Holiday versus regular week sales.

    percentage_diff compares the average record amount on holiday weeks with
    the average on regular weeks; 0 when the regular average is not positive.
    """

    model_config = ConfigDict(frozen=True)

    holiday_sales: float
    non_holiday_sales: float
    percentage_diff: float


class DateRange(BaseModel):
    """Inclusive range of weeks covered by the data."""

    model_config = ConfigDict(frozen=True)

    start: date_type | None = None
    end: date_type | None = None


class KPIs(BaseModel):
    """Headline figures over the whole dataset."""

    model_config = ConfigDict(frozen=True)

    total_sales: float
    weekly_average: float = Field(..., description="Total sales / distinct weeks")
    total_transactions: int = Field(..., ge=0, description="Number of sales records")
    unique_stores: int = Field(..., ge=0)
    unique_departments: int = Field(..., ge=0)
    holiday_impact: HolidayImpact
    total_markdown: float
    date_range: DateRange


class TopWeek(BaseModel):
    """One of the highest-selling weeks."""

    model_config = ConfigDict(frozen=True)

    date: date_type
    total_sales: float
    is_holiday: bool
    rank: int = Field(..., ge=1)


class InsightsSnapshot(BaseModel):
    """Every analytics view computed over one input snapshot."""

    kpis: KPIs
    weekly: list[WeeklyAggregate]
    stores: list[StoreAggregate]
    departments: list[DepartmentAggregate]
    store_types: list[StoreTypeAggregate]
    months: list[MonthlyAggregate]
    weekly_features: list[WeeklyFeatureAggregate]
    anomalies: AnomalyReport
    weekly_anomalies: WeeklyAnomalyReport
    volatility: list[StoreVolatility]
    risk_counts: RiskCounts
    drop_alerts: list[DropAlert]
    top_weeks: list[TopWeek]
    forecast: ForecastOutput | None = Field(
        None, description="Null when history is too short to forecast"
    )
