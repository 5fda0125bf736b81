"""Pydantic schemas for anomaly detection results.

Anomalies are derived facts produced fresh on each detection run.
"""

from datetime import date as date_type
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AnomalyKind(str, Enum):
    """Direction of an outlier."""

    HIGH = "high"
    LOW = "low"


class DetectionStatus(str, Enum):
    """Whether a detector had enough data to run.

    OK means at least one group was evaluated, even if nothing was flagged.
    INSUFFICIENT_DATA means no group met the minimum sample size.
    """

    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"


class Anomaly(BaseModel):
    """A sales record outside its store-department IQR fence."""

    model_config = ConfigDict(frozen=True)

    store: int
    dept: int
    date: date_type
    sales: float
    kind: AnomalyKind
    deviation: float = Field(
        ...,
        description="Distance from the group median in IQR units (always positive).",
    )


class AnomalyReport(BaseModel):
    """Record-level IQR detection outcome.

    Anomalies are ranked by absolute deviation, descending, across all groups.
    """

    model_config = ConfigDict(frozen=True)

    status: DetectionStatus
    anomalies: list[Anomaly] = Field(default_factory=list)
    groups_evaluated: int = Field(0, ge=0, description="Groups with a usable IQR")
    groups_insufficient: int = Field(
        0, ge=0, description="Groups below the minimum sample size"
    )
    groups_zero_spread: int = Field(0, ge=0, description="Groups skipped because IQR == 0")
    multiplier: float

    def top(self, n: int) -> list[Anomaly]:
        """Return the n most extreme anomalies."""
        return self.anomalies[:n]


class WeeklyAnomalyFlag(BaseModel):
    """Week-level z-score flag on the aggregate weekly total."""

    model_config = ConfigDict(frozen=True)

    date: date_type
    total_sales: float
    is_anomaly: bool
    kind: AnomalyKind | None = None
    z_score: float = Field(..., description="(total - mean) / sample std; 0 when std is 0")


class WeeklyAnomalyReport(BaseModel):
    """Week-level z-score detection outcome, one flag per week in date order."""

    model_config = ConfigDict(frozen=True)

    status: DetectionStatus
    flags: list[WeeklyAnomalyFlag] = Field(default_factory=list)
    mean: float = 0.0
    std_dev: float = 0.0
    sigma: float

    @property
    def anomaly_count(self) -> int:
        """Number of flagged weeks."""
        return sum(1 for f in self.flags if f.is_anomaly)
