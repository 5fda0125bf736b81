"""Anomaly module: record-level IQR outliers and week-level z-score flags."""

from storepulse.features.anomalies.detector import (
    detect_record_anomalies,
    detect_weekly_anomalies,
)
from storepulse.features.anomalies.schemas import (
    Anomaly,
    AnomalyKind,
    AnomalyReport,
    DetectionStatus,
    WeeklyAnomalyFlag,
    WeeklyAnomalyReport,
)

__all__ = [
    "Anomaly",
    "AnomalyKind",
    "AnomalyReport",
    "DetectionStatus",
    "WeeklyAnomalyFlag",
    "WeeklyAnomalyReport",
    "detect_record_anomalies",
    "detect_weekly_anomalies",
]
