"""Feature-specific test fixtures for anomalies module."""

from collections.abc import Callable, Sequence
from datetime import date, timedelta

import pytest

from storepulse.features.aggregation.schemas import WeeklyAggregate
from storepulse.features.ingest.schemas import SalesRecord

START = date(2010, 2, 5)


@pytest.fixture
def make_series() -> Callable[[int, int, Sequence[float]], list[SalesRecord]]:
    """Factory for one store-department series of consecutive weeks."""

    def _make(store: int, dept: int, amounts: Sequence[float]) -> list[SalesRecord]:
        return [
            SalesRecord(store=store, dept=dept, date=START + timedelta(weeks=i), amount=a)
            for i, a in enumerate(amounts)
        ]

    return _make


@pytest.fixture
def make_weeks() -> Callable[[Sequence[float]], list[WeeklyAggregate]]:
    """Factory for consecutive weekly aggregates."""

    def _make(totals: Sequence[float]) -> list[WeeklyAggregate]:
        return [
            WeeklyAggregate(
                date=START + timedelta(weeks=i),
                total_sales=t,
                store_count=1,
                is_holiday=False,
                avg_sales_per_store=t,
            )
            for i, t in enumerate(totals)
        ]

    return _make


@pytest.fixture
def spread_baseline() -> list[float]:
    """Eleven ordinary weeks with some spread (95-105)."""
    return [95.0, 97.0, 99.0, 100.0, 101.0, 103.0, 105.0, 96.0, 98.0, 102.0, 104.0]
