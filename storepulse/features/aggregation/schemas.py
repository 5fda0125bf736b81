"""Pydantic schemas for aggregate views.

Aggregates are derived snapshots: recomputed from the record set on every
computation cycle and never mutated in place (frozen=True).
"""

from datetime import date as date_type

from pydantic import BaseModel, ConfigDict, Field

from storepulse.features.ingest.schemas import StoreType


class AggregateBase(BaseModel):
    """Base configuration shared by all aggregate rows."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class WeeklyAggregate(AggregateBase):
    """Sales totals for one week across all stores and departments."""

    date: date_type
    total_sales: float = Field(..., description="Sum of amount for the week")
    store_count: int = Field(..., ge=0, description="Distinct stores reporting that week")
    is_holiday: bool = Field(..., description="Holiday flag of any contributing record")
    avg_sales_per_store: float


class StoreAggregate(AggregateBase):
    """Sales rollup for one store."""

    store: int
    type: StoreType = Field(..., description="Store type (A when the store has no metadata)")
    size: int = Field(..., ge=0, description="Store size (0 when the store has no metadata)")
    total_sales: float
    avg_weekly_sales: float
    transaction_count: int = Field(..., ge=0, description="Number of sales records")
    volatility: float = Field(
        ...,
        ge=0,
        description="Coefficient of variation of record sales, in percent. "
        "Population standard deviation; 0 when the mean is 0.",
    )
    departments: tuple[int, ...] = Field(..., description="Sorted distinct departments")


class DepartmentAggregate(AggregateBase):
    """Sales rollup for one department across stores."""

    dept: int
    total_sales: float
    avg_weekly_sales: float
    transaction_count: int = Field(..., ge=0)
    store_count: int = Field(..., ge=0)


class StoreTypeAggregate(AggregateBase):
    """Sales rollup for one store format."""

    type: StoreType
    store_count: int = Field(..., ge=0)
    total_sales: float
    avg_sales_per_store: float
    avg_size: float
    avg_volatility: float


class MonthlyAggregate(AggregateBase):
    """Calendar-month rollup of weekly totals (all years combined)."""

    month: int = Field(..., ge=1, le=12)
    month_name: str
    total_sales: float
    avg_weekly_sales: float = Field(..., description="Average weekly total within the month")
    week_count: int = Field(..., ge=0)


class WeeklyFeatureAggregate(AggregateBase):
    """Weekly totals joined with averaged exogenous features.

    Feature averages are None when no feature row joins that week.
    """

    date: date_type
    total_sales: float
    avg_temperature: float | None = None
    avg_fuel_price: float | None = None
    avg_cpi: float | None = None
    avg_unemployment: float | None = None
    is_holiday: bool
