"""Pydantic schemas for week-over-week drop alerts."""

from datetime import date as date_type

from pydantic import BaseModel, ConfigDict, Field


class StoreWeeklyTotal(BaseModel):
    """Total sales of one store in one week (all departments)."""

    model_config = ConfigDict(frozen=True)

    store: int
    date: date_type
    total_sales: float


class DropAlert(BaseModel):
    """A consecutive-week sales decline beyond the alert threshold."""

    model_config = ConfigDict(frozen=True)

    store: int
    date: date_type = Field(..., description="Week of the decline")
    previous_date: date_type = Field(..., description="Preceding reported week")
    current_sales: float
    previous_sales: float = Field(..., gt=0, description="Always positive; zero bases are skipped")
    change_percent: float = Field(..., description="(current - previous) / previous * 100")
