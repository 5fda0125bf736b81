"""Feature-specific test fixtures for alerts module."""

from datetime import date, timedelta

import pytest

from storepulse.features.ingest.schemas import SalesRecord

START = date(2010, 2, 5)


@pytest.fixture
def store5_sales() -> list[SalesRecord]:
    """Store 5 with weekly totals 1000, 1000, 790 split across two departments."""
    totals = [(600.0, 400.0), (500.0, 500.0), (490.0, 300.0)]
    return [
        SalesRecord(store=5, dept=dept, date=START + timedelta(weeks=week), amount=amount)
        for week, amounts in enumerate(totals)
        for dept, amount in enumerate(amounts, start=1)
    ]


@pytest.fixture
def zero_base_sales() -> list[SalesRecord]:
    """Store 8 drops to zero, then recovers, then crashes."""
    totals = [500.0, 0.0, 400.0, 100.0]
    return [
        SalesRecord(store=8, dept=1, date=START + timedelta(weeks=i), amount=t)
        for i, t in enumerate(totals)
    ]
