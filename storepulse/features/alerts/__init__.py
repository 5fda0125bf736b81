"""Alerts module: week-over-week drop detection per store."""

from storepulse.features.alerts.detector import (
    detect_drop_alerts,
    scan_drops,
    store_weekly_totals,
    week_over_week,
)
from storepulse.features.alerts.schemas import DropAlert, StoreWeeklyTotal

__all__ = [
    "DropAlert",
    "StoreWeeklyTotal",
    "detect_drop_alerts",
    "scan_drops",
    "store_weekly_totals",
    "week_over_week",
]
