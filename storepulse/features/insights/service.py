"""Insights service: every analytics view over one immutable snapshot.

Orchestrates:
- Aggregation views (weekly, store, department, type, month, features)
- Record-level and weekly anomaly detection
- Volatility classification and risk counts
- Week-over-week drop alerts
- The weekly sales forecast

All thresholds come from Settings and are passed explicitly to the pure
feature functions.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence

import numpy as np

from storepulse.core.config import Settings, get_settings
from storepulse.core.exceptions import InsufficientHistoryError
from storepulse.core.logging import get_logger, run_context
from storepulse.features.aggregation.providers import AggregationEngine
from storepulse.features.aggregation.schemas import WeeklyAggregate
from storepulse.features.aggregation.service import aggregate_weekly_features
from storepulse.features.alerts.detector import detect_drop_alerts
from storepulse.features.anomalies.detector import (
    detect_record_anomalies,
    detect_weekly_anomalies,
)
from storepulse.features.forecasting.schemas import ForecastConfig, ForecastOutput
from storepulse.features.forecasting.service import ForecastEngine
from storepulse.features.ingest.schemas import FeatureRecord, SalesRecord, StoreMeta
from storepulse.features.insights.schemas import (
    DateRange,
    HolidayImpact,
    InsightsSnapshot,
    KPIs,
    TopWeek,
)
from storepulse.features.volatility.classifier import (
    calculate_store_volatility,
    count_risk_tiers,
)

logger = get_logger(__name__)

DEFAULT_TOP_WEEKS = 5


def holiday_impact(sales: Sequence[SalesRecord]) -> HolidayImpact:
    """Compare holiday and regular week sales.

    Args:
        sales: Normalized sales records.

    Returns:
        Totals per class and the percentage difference of their record averages.
    """
    holiday = [r.amount for r in sales if r.is_holiday]
    regular = [r.amount for r in sales if not r.is_holiday]

    holiday_avg = float(np.mean(holiday)) if holiday else 0.0
    regular_avg = float(np.mean(regular)) if regular else 0.0
    diff = (holiday_avg - regular_avg) / regular_avg * 100.0 if regular_avg > 0 else 0.0

    return HolidayImpact(
        holiday_sales=float(sum(holiday)),
        non_holiday_sales=float(sum(regular)),
        percentage_diff=diff,
    )


def compute_kpis(
    sales: Sequence[SalesRecord],
    features: Sequence[FeatureRecord] = (),
) -> KPIs:
    """Headline figures over the whole dataset.

    Empty input yields zeros and an open date range.
    """
    total = float(sum(r.amount for r in sales))
    weeks = {r.date for r in sales}

    return KPIs(
        total_sales=total,
        weekly_average=total / len(weeks) if weeks else 0.0,
        total_transactions=len(sales),
        unique_stores=len({r.store for r in sales}),
        unique_departments=len({r.dept for r in sales}),
        holiday_impact=holiday_impact(sales),
        total_markdown=float(sum(f.total_markdown for f in features)),
        date_range=DateRange(start=min(weeks), end=max(weeks)) if weeks else DateRange(),
    )


def top_weeks(weekly: Iterable[WeeklyAggregate], limit: int = DEFAULT_TOP_WEEKS) -> list[TopWeek]:
    """Rank weeks by total sales, highest first (ties by date)."""
    ranked = sorted(weekly, key=lambda w: (-w.total_sales, w.date))[:limit]
    return [
        TopWeek(date=w.date, total_sales=w.total_sales, is_holiday=w.is_holiday, rank=i)
        for i, w in enumerate(ranked, start=1)
    ]


class InsightsService:
    """Fan out every analytics entry point over one input snapshot.

    Attributes:
        settings: Thresholds and forecast configuration source.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.forecast_engine = ForecastEngine(ForecastConfig.from_settings(self.settings))

    def build_snapshot(
        self,
        sales: Iterable[SalesRecord],
        features: Iterable[FeatureRecord] = (),
        stores: Iterable[StoreMeta] = (),
        top_week_limit: int = DEFAULT_TOP_WEEKS,
        run_id: str | None = None,
    ) -> InsightsSnapshot:
        """Compute the full dashboard snapshot.

        Args:
            sales: Normalized sales records.
            features: Normalized feature records.
            stores: Store dimension rows.
            top_week_limit: Number of top weeks to return.
            run_id: Correlation id merged into every log event.

        Returns:
            InsightsSnapshot with every view. The forecast is None when the
            history holds fewer than two weeks.
        """
        with run_context(run_id):
            return self._build(tuple(sales), tuple(features), tuple(stores), top_week_limit)

    def _build(
        self,
        sales: tuple[SalesRecord, ...],
        features: tuple[FeatureRecord, ...],
        stores: tuple[StoreMeta, ...],
        top_week_limit: int,
    ) -> InsightsSnapshot:
        s = self.settings
        start_time = time.perf_counter()
        logger.info(
            "insights.snapshot_started",
            sales_count=len(sales),
            feature_count=len(features),
            store_count=len(stores),
        )

        aggregates = AggregationEngine.from_records(sales, stores).snapshot()
        volatility = calculate_store_volatility(
            sales,
            stores,
            medium_threshold=s.risk_medium_threshold,
            high_threshold=s.risk_high_threshold,
        )

        snapshot = InsightsSnapshot(
            kpis=compute_kpis(sales, features),
            weekly=aggregates.weekly,
            stores=aggregates.stores,
            departments=aggregates.departments,
            store_types=aggregates.store_types,
            months=aggregates.months,
            weekly_features=aggregate_weekly_features(sales, features),
            anomalies=detect_record_anomalies(
                sales,
                multiplier=s.iqr_multiplier,
                min_group_size=s.anomaly_min_group_size,
            ),
            weekly_anomalies=detect_weekly_anomalies(
                aggregates.weekly,
                sigma=s.weekly_zscore_sigma,
                min_weeks=s.weekly_min_weeks,
            ),
            volatility=volatility,
            risk_counts=count_risk_tiers(volatility),
            drop_alerts=detect_drop_alerts(sales, threshold=s.drop_alert_threshold),
            top_weeks=top_weeks(aggregates.weekly, top_week_limit),
            forecast=self._forecast(aggregates.weekly),
        )

        logger.info(
            "insights.snapshot_completed",
            weeks=len(snapshot.weekly),
            anomalies=len(snapshot.anomalies.anomalies),
            drop_alerts=len(snapshot.drop_alerts),
            has_forecast=snapshot.forecast is not None,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return snapshot

    def _forecast(self, weekly: list[WeeklyAggregate]) -> ForecastOutput | None:
        try:
            return self.forecast_engine.forecast(weekly)
        except InsufficientHistoryError as e:
            logger.warning(
                "insights.forecast_skipped",
                error=e.message,
                error_code=e.code,
                **e.details,
            )
            return None
