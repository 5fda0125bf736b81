"""Statistical outlier detection.

Two detectors, each feeding its own output field:

- Record level (IQR): per (store, dept) group, flags sales outside
  [Q1 - k*IQR, Q3 + k*IQR]. Quartiles use the floor(n * p) index convention.
- Week level (z-score): flags weekly totals more than sigma sample standard
  deviations away from the mean of all weekly totals.

CRITICAL: Groups below the minimum sample size and groups with zero spread
are skipped, never divided by.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from storepulse.core.constants import IQR_MULTIPLIER, MIN_GROUP_SIZE, WEEKLY_ZSCORE_SIGMA
from storepulse.core.exceptions import InvalidInputError
from storepulse.core.logging import get_logger
from storepulse.features.aggregation.schemas import WeeklyAggregate
from storepulse.features.anomalies.schemas import (
    Anomaly,
    AnomalyKind,
    AnomalyReport,
    DetectionStatus,
    WeeklyAnomalyFlag,
    WeeklyAnomalyReport,
)
from storepulse.features.ingest.schemas import SalesRecord
from storepulse.shared.frames import sales_frame
from storepulse.shared.stats import lower_quartiles

logger = get_logger(__name__)


def detect_record_anomalies(
    sales: Iterable[SalesRecord],
    multiplier: float = IQR_MULTIPLIER,
    min_group_size: int = MIN_GROUP_SIZE,
) -> AnomalyReport:
    """Flag store-department sales outside the IQR fences.

    Deviation is reported in IQR units from the group median:
    (median - value) / IQR for low, (value - median) / IQR for high.

    Args:
        sales: Normalized sales records.
        multiplier: Fence multiplier k.
        min_group_size: Minimum observations per (store, dept) group.

    Returns:
        AnomalyReport ranked by absolute deviation, descending.

    Raises:
        InvalidInputError: If multiplier is not positive or min_group_size < 1.
    """
    if multiplier <= 0:
        raise InvalidInputError(
            f"IQR multiplier must be positive, got {multiplier}",
            details={"multiplier": multiplier},
        )
    if min_group_size < 1:
        raise InvalidInputError(
            f"Minimum group size must be at least 1, got {min_group_size}",
            details={"min_group_size": min_group_size},
        )

    df = sales_frame(sales)
    anomalies: list[Anomaly] = []
    groups_total = evaluated = insufficient = zero_spread = 0

    if not df.empty:
        for _, group in df.groupby(["store", "dept"], sort=False):
            groups_total += 1
            if len(group) < min_group_size:
                insufficient += 1
                continue

            quartiles = lower_quartiles(group["amount"].to_numpy())
            iqr = quartiles.iqr
            if iqr == 0:
                zero_spread += 1
                continue

            evaluated += 1
            amounts = group["amount"]
            low = amounts < quartiles.q1 - multiplier * iqr
            high = amounts > quartiles.q3 + multiplier * iqr
            deviation = np.where(high, amounts - quartiles.median, quartiles.median - amounts)
            flagged = group.assign(
                kind=np.where(high, AnomalyKind.HIGH.value, AnomalyKind.LOW.value),
                deviation=deviation / iqr,
            )[low | high]
            anomalies.extend(
                Anomaly.model_validate(row)
                for row in flagged.rename(columns={"amount": "sales"}).to_dict(orient="records")
            )

    anomalies.sort(key=lambda a: abs(a.deviation), reverse=True)
    status = DetectionStatus.OK if evaluated or zero_spread else DetectionStatus.INSUFFICIENT_DATA

    logger.info(
        "anomalies.record_detection_completed",
        status=status.value,
        groups_total=groups_total,
        groups_evaluated=evaluated,
        groups_insufficient=insufficient,
        groups_zero_spread=zero_spread,
        anomaly_count=len(anomalies),
    )

    return AnomalyReport(
        status=status,
        anomalies=anomalies,
        groups_evaluated=evaluated,
        groups_insufficient=insufficient,
        groups_zero_spread=zero_spread,
        multiplier=multiplier,
    )


def detect_weekly_anomalies(
    weekly: Iterable[WeeklyAggregate],
    sigma: float = WEEKLY_ZSCORE_SIGMA,
    min_weeks: int = MIN_GROUP_SIZE,
) -> WeeklyAnomalyReport:
    """Flag weekly totals far from the mean of all weeks.

    Formula: z = (total - mean) / std, with the sample standard deviation.
    A week is high when z > sigma and low when z < -sigma.

    Args:
        weekly: Weekly aggregates.
        sigma: Threshold in standard deviations.
        min_weeks: Minimum number of weeks required.

    Returns:
        WeeklyAnomalyReport with one flag per week, sorted by date.

    Raises:
        InvalidInputError: If sigma is not positive or min_weeks < 2.
    """
    if sigma <= 0:
        raise InvalidInputError(f"sigma must be positive, got {sigma}", details={"sigma": sigma})
    if min_weeks < 2:
        raise InvalidInputError(
            f"min_weeks must be at least 2, got {min_weeks}",
            details={"min_weeks": min_weeks},
        )

    weeks = sorted(weekly, key=lambda w: w.date)

    if len(weeks) < min_weeks:
        logger.info(
            "anomalies.weekly_detection_skipped",
            reason="insufficient_data",
            weeks=len(weeks),
            min_weeks=min_weeks,
        )
        return WeeklyAnomalyReport(
            status=DetectionStatus.INSUFFICIENT_DATA,
            flags=[
                WeeklyAnomalyFlag(
                    date=w.date, total_sales=w.total_sales, is_anomaly=False, z_score=0.0
                )
                for w in weeks
            ],
            sigma=sigma,
        )

    totals = np.array([w.total_sales for w in weeks], dtype=np.float64)
    mean = float(np.mean(totals))
    std_dev = float(np.std(totals, ddof=1))

    flags: list[WeeklyAnomalyFlag] = []
    for week in weeks:
        z_score = (week.total_sales - mean) / std_dev if std_dev > 0 else 0.0
        kind: AnomalyKind | None = None
        if z_score > sigma:
            kind = AnomalyKind.HIGH
        elif z_score < -sigma:
            kind = AnomalyKind.LOW
        flags.append(
            WeeklyAnomalyFlag(
                date=week.date,
                total_sales=week.total_sales,
                is_anomaly=kind is not None,
                kind=kind,
                z_score=z_score,
            )
        )

    report = WeeklyAnomalyReport(
        status=DetectionStatus.OK,
        flags=flags,
        mean=mean,
        std_dev=std_dev,
        sigma=sigma,
    )
    logger.info(
        "anomalies.weekly_detection_completed",
        weeks=len(weeks),
        anomaly_count=report.anomaly_count,
        mean=mean,
        std_dev=std_dev,
    )
    return report
