"""Week-over-week drop alert detector.

Strictly pairwise and stateless: no smoothing, no multi-week lookback.
Each store's weekly total is compared with its own previous reported week
(grouped shift, so series never leak across stores).
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from storepulse.core.constants import DROP_ALERT_THRESHOLD
from storepulse.core.logging import get_logger
from storepulse.features.alerts.schemas import DropAlert, StoreWeeklyTotal
from storepulse.features.ingest.schemas import SalesRecord
from storepulse.shared.frames import records_frame, sales_frame

logger = get_logger(__name__)

TOTAL_COLUMNS = ("store", "date", "total_sales")


def store_weekly_totals(sales: Iterable[SalesRecord]) -> pd.DataFrame:
    """Sum each store's departments per week.

    Args:
        sales: Normalized sales records.

    Returns:
        Frame with store, date and total_sales, sorted by store then date.
    """
    df = sales_frame(sales)
    if df.empty:
        return pd.DataFrame(columns=list(TOTAL_COLUMNS))

    return (
        df.groupby(["store", "date"], as_index=False, sort=True)["amount"]
        .sum()
        .rename(columns={"amount": "total_sales"})
    )


def week_over_week(totals: pd.DataFrame) -> pd.DataFrame:
    """Attach the previous week and the percentage change to each row.

    Formula: change_percent = (current - previous) / previous * 100

    change_percent is NaN for a store's first week and wherever the previous
    total is <= 0.

    Args:
        totals: Frame with store, date and total_sales.

    Returns:
        Copy sorted by store then date with previous_date, previous_sales and
        change_percent columns.
    """
    result = totals.sort_values(["store", "date"]).reset_index(drop=True)
    by_store = result.groupby("store", sort=False)
    result["previous_date"] = by_store["date"].shift()
    result["previous_sales"] = by_store["total_sales"].shift()

    base = result["previous_sales"]
    result["change_percent"] = ((result["total_sales"] - base) / base * 100.0).where(base > 0)
    return result


def _alerts(changes: pd.DataFrame, threshold: float) -> list[DropAlert]:
    drops = changes[changes["change_percent"] <= threshold]
    drops = drops.sort_values(["change_percent", "store", "date"], kind="stable")
    return [
        DropAlert.model_validate(row)
        for row in drops.rename(columns={"total_sales": "current_sales"}).to_dict(orient="records")
    ]


def scan_drops(
    series: Iterable[StoreWeeklyTotal],
    threshold: float = DROP_ALERT_THRESHOLD,
) -> list[DropAlert]:
    """Scan already-summed weekly totals for drops.

    Pairs whose previous total is <= 0 are skipped.

    Args:
        series: Weekly store totals in any order, one or many stores.
        threshold: Alert when change_percent <= threshold.

    Returns:
        Alerts sorted by change_percent ascending.
    """
    totals = records_frame(series, TOTAL_COLUMNS)
    if totals.empty:
        return []
    return _alerts(week_over_week(totals), threshold)


def detect_drop_alerts(
    sales: Iterable[SalesRecord],
    threshold: float = DROP_ALERT_THRESHOLD,
) -> list[DropAlert]:
    """Detect week-over-week sales drops for every store.

    Args:
        sales: Normalized sales records.
        threshold: Percentage change at or below which an alert fires.

    Returns:
        Alerts sorted by change_percent ascending (most severe first).
    """
    totals = store_weekly_totals(sales)
    alerts = [] if totals.empty else _alerts(week_over_week(totals), threshold)

    logger.info(
        "alerts.drop_scan_completed",
        threshold=threshold,
        alert_count=len(alerts),
        stores_alerted=len({a.store for a in alerts}),
    )
    return alerts
