"""Feature-specific test fixtures for volatility module."""

from datetime import date, timedelta

import pytest

from storepulse.features.ingest.schemas import SalesRecord, StoreMeta, StoreType

START = date(2010, 2, 5)


def _series(store: int, amounts: list[float]) -> list[SalesRecord]:
    return [
        SalesRecord(store=store, dept=1, date=START + timedelta(weeks=i), amount=a)
        for i, a in enumerate(amounts)
    ]


@pytest.fixture
def tiered_sales() -> list[SalesRecord]:
    """Three stores, one per risk tier.

    Store 1: 90/110 -> CV 10 (low)
    Store 2: 60/140 -> CV 40 (medium)
    Store 3: 20/180 -> CV 80 (high)
    """
    return [
        *_series(1, [90.0, 110.0, 90.0, 110.0]),
        *_series(2, [60.0, 140.0, 60.0, 140.0]),
        *_series(3, [20.0, 180.0, 20.0, 180.0]),
    ]


@pytest.fixture
def tiered_stores() -> list[StoreMeta]:
    """Metadata for stores 1 and 3 only."""
    return [
        StoreMeta(store=1, type=StoreType.B, size=100000),
        StoreMeta(store=3, type=StoreType.C, size=40000),
    ]
