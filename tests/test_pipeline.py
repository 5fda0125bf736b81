"""End-to-end tests: raw frames through normalization to the insights snapshot."""

from datetime import date

import pytest

from storepulse.features.aggregation.providers import AggregationEngine, PreAggregatedProvider
from storepulse.features.ingest.normalizer import (
    normalize_feature_frame,
    normalize_sales_frame,
    normalize_store_frame,
)
from storepulse.features.insights.service import InsightsService
from storepulse.features.volatility.schemas import RiskTier


def test_pipeline_from_frames(settings, train_frame, stores_frame, features_frame):
    """Raw CSV-shaped frames should produce a complete snapshot."""
    sales = normalize_sales_frame(train_frame)
    stores = normalize_store_frame(stores_frame)
    features = normalize_feature_frame(features_frame)

    assert sales.accepted_count == 180
    assert [e.error_code for e in sales.rejected] == ["INVALID_DATE"]

    snapshot = InsightsService(settings).build_snapshot(
        sales.records, features.records, stores.records
    )

    assert snapshot.kpis.total_transactions == 180
    assert snapshot.kpis.total_markdown == pytest.approx(500.0)
    assert sum(w.total_sales for w in snapshot.weekly) == pytest.approx(snapshot.kpis.total_sales)
    assert len(snapshot.weekly) == 30
    assert snapshot.weekly[5].is_holiday is True
    assert snapshot.forecast is not None
    assert len(snapshot.forecast.predictions) == settings.forecast_horizon_weeks


def test_drop_is_alerted(settings, train_frame):
    """The store 3 collapse in week 20 should be the only drop alert."""
    sales = normalize_sales_frame(train_frame).records

    snapshot = InsightsService(settings).build_snapshot(sales)

    assert [(a.store, a.date) for a in snapshot.drop_alerts] == [(3, date(2011, 5, 27))]
    assert snapshot.drop_alerts[0].change_percent == pytest.approx(-50.0, abs=0.5)


def test_low_volatility_stores(settings, train_frame, stores_frame):
    """Steady stores should all land in the low risk tier."""
    sales = normalize_sales_frame(train_frame).records
    stores = normalize_store_frame(stores_frame).records

    snapshot = InsightsService(settings).build_snapshot(sales, stores=stores)

    assert {v.risk for v in snapshot.volatility} == {RiskTier.LOW}
    assert snapshot.risk_counts.low == 3


def test_grouped_rows_match_record_views(train_frame, stores_frame):
    """A grouped-query provider should reproduce the record-based views."""
    sales = normalize_sales_frame(train_frame).records
    stores = normalize_store_frame(stores_frame).records
    record_engine = AggregationEngine.from_records(sales, stores)

    grouped_engine = AggregationEngine(
        PreAggregatedProvider(
            weekly_rows=[w.model_dump() for w in record_engine.weekly()],
            store_rows=[s.model_dump() for s in record_engine.stores()],
            department_rows=[d.model_dump() for d in record_engine.departments()],
        )
    )

    assert grouped_engine.snapshot() == record_engine.snapshot()
