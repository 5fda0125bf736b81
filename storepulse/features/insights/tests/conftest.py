"""Feature-specific test fixtures for insights module."""

from datetime import date, timedelta

import pytest

from storepulse.core.config import Settings
from storepulse.features.ingest.schemas import FeatureRecord, SalesRecord, StoreMeta, StoreType

START = date(2010, 10, 1)
WEEKS = 12


@pytest.fixture
def dataset_sales() -> list[SalesRecord]:
    """Stores 1 and 2, departments 1 and 2, twelve weeks.

    Store 1 sells 100 per department every week; store 2 sells 200 except in
    week 6 (index 5), where department 1 collapses to 20. Week index 7 is a
    holiday week.
    """
    records: list[SalesRecord] = []
    for week in range(WEEKS):
        day = START + timedelta(weeks=week)
        holiday = week == 7
        for dept in (1, 2):
            amount = 20.0 if (week == 5 and dept == 1) else 200.0
            records += [
                SalesRecord(store=1, dept=dept, date=day, amount=100.0, is_holiday=holiday),
                SalesRecord(store=2, dept=dept, date=day, amount=amount, is_holiday=holiday),
            ]
    return records


@pytest.fixture
def dataset_features() -> list[FeatureRecord]:
    """Feature rows for store 1, with markdowns in the first two weeks."""
    return [
        FeatureRecord(
            store=1,
            date=START + timedelta(weeks=week),
            temperature=50.0,
            markdowns=(100.0, None, 25.0, None, None) if week < 2 else (),
        )
        for week in range(WEEKS)
    ]


@pytest.fixture
def dataset_stores() -> list[StoreMeta]:
    """Store dimension for both stores."""
    return [
        StoreMeta(store=1, type=StoreType.A, size=150000),
        StoreMeta(store=2, type=StoreType.B, size=90000),
    ]


@pytest.fixture
def testing_settings() -> Settings:
    """Settings in testing mode (not the cached singleton)."""
    return Settings(app_env="testing")
