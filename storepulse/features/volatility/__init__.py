"""Volatility module: per-store coefficient of variation and risk tiers."""

from storepulse.features.volatility.classifier import (
    calculate_store_volatility,
    classify_risk,
    count_risk_tiers,
)
from storepulse.features.volatility.schemas import RiskCounts, RiskTier, StoreVolatility

__all__ = [
    "RiskCounts",
    "RiskTier",
    "StoreVolatility",
    "calculate_store_volatility",
    "classify_risk",
    "count_risk_tiers",
]
