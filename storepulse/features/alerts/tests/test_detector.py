"""Tests for week-over-week drop alerts."""

from datetime import date

import pytest

from storepulse.features.alerts.detector import (
    detect_drop_alerts,
    scan_drops,
    store_weekly_totals,
    week_over_week,
)
from storepulse.features.alerts.schemas import StoreWeeklyTotal


class TestStoreWeeklyTotals:
    """Tests for per-store weekly sums."""

    def test_departments_are_summed(self, store5_sales) -> None:
        """Test totals add every department of the week."""
        totals = store_weekly_totals(store5_sales)

        store5 = totals[totals["store"] == 5]
        assert store5["total_sales"].tolist() == [1000.0, 1000.0, 790.0]

    def test_sorted_by_date(self, store5_sales) -> None:
        """Test each store's series is date ascending."""
        totals = store_weekly_totals(reversed(store5_sales))

        dates = totals["date"].tolist()
        assert dates == sorted(dates)

    def test_empty_input_keeps_columns(self) -> None:
        """Test no records yields an empty frame with the total columns."""
        totals = store_weekly_totals([])

        assert totals.empty
        assert list(totals.columns) == ["store", "date", "total_sales"]


class TestWeekOverWeek:
    """Tests for the grouped pairwise change."""

    def test_previous_week_never_crosses_stores(self, store5_sales, zero_base_sales) -> None:
        """Test each store's first week has no previous week."""
        changes = week_over_week(store_weekly_totals([*store5_sales, *zero_base_sales]))

        firsts = changes.groupby("store").head(1)
        assert firsts["previous_sales"].isna().all()
        assert firsts["change_percent"].isna().all()

    def test_change_is_relative_to_previous(self, store5_sales) -> None:
        """Test the change formula on the store 5 series."""
        changes = week_over_week(store_weekly_totals(store5_sales))

        assert changes["change_percent"].iloc[1] == pytest.approx(0.0)
        assert changes["change_percent"].iloc[2] == pytest.approx(-21.0)
        assert changes["previous_date"].iloc[2] == date(2010, 2, 12)


class TestDetectDropAlerts:
    """Tests for the drop detector."""

    def test_store5_scenario(self, store5_sales) -> None:
        """Test 1000 -> 790 fires an alert at -21%."""
        alerts = detect_drop_alerts(store5_sales)

        assert len(alerts) == 1
        alert = alerts[0]
        assert alert.store == 5
        assert alert.date == date(2010, 2, 19)
        assert alert.previous_date == date(2010, 2, 12)
        assert alert.previous_sales == 1000.0
        assert alert.current_sales == 790.0
        assert alert.change_percent == pytest.approx(-21.0)

    def test_threshold_is_inclusive(self, store5_sales) -> None:
        """Test a change exactly at the threshold alerts."""
        assert len(detect_drop_alerts(store5_sales, threshold=-21.0)) == 1
        assert detect_drop_alerts(store5_sales, threshold=-25.0) == []

    def test_zero_previous_is_skipped(self, zero_base_sales) -> None:
        """Test pairs with previous sales <= 0 never alert."""
        alerts = detect_drop_alerts(zero_base_sales)

        # 500 -> 0 alerts (-100%), 0 -> 400 skipped, 400 -> 100 alerts (-75%)
        assert [a.change_percent for a in alerts] == pytest.approx([-100.0, -75.0])
        assert all(a.previous_sales > 0 for a in alerts)

    def test_sorted_most_severe_first(self, store5_sales, zero_base_sales) -> None:
        """Test alerts across stores are ordered by change ascending."""
        alerts = detect_drop_alerts([*store5_sales, *zero_base_sales])

        assert [a.store for a in alerts] == [8, 8, 5]

    def test_empty_input(self) -> None:
        """Test no records yields no alerts."""
        assert detect_drop_alerts([]) == []


class TestScanDrops:
    """Tests for the pairwise scan."""

    def test_single_week_has_no_pairs(self) -> None:
        """Test one week cannot alert."""
        series = [StoreWeeklyTotal(store=1, date=date(2010, 2, 5), total_sales=100.0)]

        assert scan_drops(series) == []

    def test_negative_previous_is_skipped(self) -> None:
        """Test a negative base (net returns) is skipped."""
        series = [
            StoreWeeklyTotal(store=1, date=date(2010, 2, 5), total_sales=-50.0),
            StoreWeeklyTotal(store=1, date=date(2010, 2, 12), total_sales=-500.0),
        ]

        assert scan_drops(series) == []

    def test_unsorted_series_is_ordered_before_pairing(self) -> None:
        """Test pairs follow the calendar, not the input order."""
        series = [
            StoreWeeklyTotal(store=1, date=date(2010, 2, 12), total_sales=50.0),
            StoreWeeklyTotal(store=1, date=date(2010, 2, 5), total_sales=100.0),
        ]

        alerts = scan_drops(series)

        assert len(alerts) == 1
        assert alerts[0].previous_date == date(2010, 2, 5)
        assert alerts[0].change_percent == pytest.approx(-50.0)
