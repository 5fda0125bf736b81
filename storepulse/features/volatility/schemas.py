"""Pydantic schemas for store volatility classification."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from storepulse.features.ingest.schemas import StoreType


class RiskTier(str, Enum):
    """Volatility risk bucket."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StoreVolatility(BaseModel):
    """Sales volatility of one store.

    The risk tier is a pure function of coefficient_of_variation.
    """

    model_config = ConfigDict(frozen=True)

    store: int
    type: StoreType
    mean: float
    std_dev: float = Field(..., ge=0, description="Population standard deviation")
    coefficient_of_variation: float = Field(
        ..., ge=0, description="std_dev / mean * 100; 0 when the mean is not positive"
    )
    risk: RiskTier


class RiskCounts(BaseModel):
    """Number of stores per risk tier."""

    model_config = ConfigDict(frozen=True)

    low: int = Field(0, ge=0)
    medium: int = Field(0, ge=0)
    high: int = Field(0, ge=0)

    @property
    def total(self) -> int:
        """Total number of classified stores."""
        return self.low + self.medium + self.high
