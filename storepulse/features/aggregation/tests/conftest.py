"""Feature-specific test fixtures for aggregation module."""

from datetime import date, timedelta

import pytest

from storepulse.features.ingest.schemas import FeatureRecord, SalesRecord, StoreMeta, StoreType


@pytest.fixture
def sample_sales() -> list[SalesRecord]:
    """Three weeks of sales for stores 1-3 (store 3 has no metadata).

    Weekly totals: 2010-02-05 = 450, 2010-02-12 = 600 (holiday), 2010-02-19 = 300.
    """
    return [
        SalesRecord(store=1, dept=1, date=date(2010, 2, 5), amount=100.0),
        SalesRecord(store=1, dept=2, date=date(2010, 2, 5), amount=200.0),
        SalesRecord(store=2, dept=1, date=date(2010, 2, 5), amount=150.0),
        SalesRecord(store=1, dept=1, date=date(2010, 2, 12), amount=300.0, is_holiday=True),
        SalesRecord(store=2, dept=1, date=date(2010, 2, 12), amount=250.0, is_holiday=True),
        SalesRecord(store=3, dept=5, date=date(2010, 2, 12), amount=50.0, is_holiday=True),
        SalesRecord(store=1, dept=1, date=date(2010, 2, 19), amount=100.0),
        SalesRecord(store=2, dept=1, date=date(2010, 2, 19), amount=200.0),
    ]


@pytest.fixture
def sample_stores() -> list[StoreMeta]:
    """Store dimension for stores 1 and 2."""
    return [
        StoreMeta(store=1, type=StoreType.A, size=150000),
        StoreMeta(store=2, type=StoreType.B, size=100000),
    ]


@pytest.fixture
def sample_features() -> list[FeatureRecord]:
    """Feature rows for the first week only (store 2 twice as warm)."""
    return [
        FeatureRecord(store=1, date=date(2010, 2, 5), temperature=40.0, fuel_price=2.5),
        FeatureRecord(store=2, date=date(2010, 2, 5), temperature=80.0, fuel_price=3.5),
        FeatureRecord(store=9, date=date(2010, 2, 5), temperature=99.0, fuel_price=9.9),
    ]


@pytest.fixture
def year_of_sales() -> list[SalesRecord]:
    """One store, one department, 52 weekly records starting 2011-01-07."""
    start = date(2011, 1, 7)
    return [
        SalesRecord(store=1, dept=1, date=start + timedelta(weeks=i), amount=1000.0 + i)
        for i in range(52)
    ]
