"""Insights module: the full dashboard snapshot over one dataset."""

from storepulse.features.insights.schemas import (
    DateRange,
    HolidayImpact,
    InsightsSnapshot,
    KPIs,
    TopWeek,
)
from storepulse.features.insights.service import (
    InsightsService,
    compute_kpis,
    holiday_impact,
    top_weeks,
)

__all__ = [
    "DateRange",
    "HolidayImpact",
    "InsightsService",
    "InsightsSnapshot",
    "KPIs",
    "TopWeek",
    "compute_kpis",
    "holiday_impact",
    "top_weeks",
]
