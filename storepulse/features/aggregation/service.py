"""In-process rollups computed from normalized records.

All functions are pure: they take the record collections as parameters and
return fresh aggregate rows. Empty input yields empty lists, never an error.
Grouping is exact key equality on store id, dept id or date, done with
pandas groupby over a frame built from the records.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import pandas as pd

from storepulse.core.constants import MONTH_NAMES
from storepulse.core.logging import get_logger
from storepulse.features.aggregation.schemas import (
    DepartmentAggregate,
    MonthlyAggregate,
    StoreAggregate,
    StoreTypeAggregate,
    WeeklyAggregate,
    WeeklyFeatureAggregate,
)
from storepulse.features.ingest.schemas import (
    FeatureRecord,
    SalesRecord,
    StoreMeta,
    StoreType,
)
from storepulse.shared.frames import feature_frame, frame_rows, records_frame, sales_frame
from storepulse.shared.stats import grouped_spread

logger = get_logger(__name__)

DEFAULT_STORE_TYPE = StoreType.A

FEATURE_MEANS = {
    "temperature": "avg_temperature",
    "fuel_price": "avg_fuel_price",
    "cpi": "avg_cpi",
    "unemployment": "avg_unemployment",
}


def weekly_totals(df: pd.DataFrame) -> pd.DataFrame:
    """Group a sales frame by date.

    The holiday flag of a week is taken from its first contributing record;
    all records of a date are assumed to share it.

    Args:
        df: Non-empty sales frame.

    Returns:
        Frame with date, total_sales, store_count, is_holiday and
        avg_sales_per_store, sorted by date ascending.
    """
    weekly = (
        df.groupby("date", sort=True)
        .agg(
            total_sales=("amount", "sum"),
            store_count=("store", "nunique"),
            is_holiday=("is_holiday", "first"),
        )
        .reset_index()
    )
    weekly["avg_sales_per_store"] = weekly["total_sales"] / weekly["store_count"]
    return weekly


def aggregate_by_week(sales: Iterable[SalesRecord]) -> list[WeeklyAggregate]:
    """Sum sales per week and count distinct reporting stores.

    Args:
        sales: Normalized sales records.

    Returns:
        Weekly aggregates sorted by date ascending.
    """
    df = sales_frame(sales)
    if df.empty:
        return []
    return [WeeklyAggregate.model_validate(row) for row in frame_rows(weekly_totals(df))]


def aggregate_by_store(
    sales: Iterable[SalesRecord],
    stores: Iterable[StoreMeta] = (),
) -> list[StoreAggregate]:
    """Roll up sales per store with volatility and department coverage.

    Volatility is the coefficient of variation (population std / mean * 100)
    of the store's per-record sales; 0 when the mean is not positive.
    Stores without metadata default to type A and size 0.

    Args:
        sales: Normalized sales records.
        stores: Store dimension rows.

    Returns:
        Store aggregates sorted by total sales descending.
    """
    df = sales_frame(sales)
    if df.empty:
        return []

    meta = {s.store: s for s in stores}
    by_store = df.groupby("store", sort=False)
    rollup = by_store.agg(
        total_sales=("amount", "sum"),
        transaction_count=("amount", "size"),
    )
    rollup = rollup.join(grouped_spread(df, "store", "amount")[["mean", "cv"]])
    rollup["departments"] = (
        by_store["dept"].unique().map(lambda depts: tuple(sorted(int(d) for d in depts)))
    )
    rollup = rollup.reset_index().sort_values(["total_sales", "store"], ascending=[False, True])

    result: list[StoreAggregate] = []
    for row in rollup.to_dict(orient="records"):
        info = meta.get(row["store"])
        result.append(
            StoreAggregate(
                store=row["store"],
                type=info.type if info else DEFAULT_STORE_TYPE,
                size=info.size if info else 0,
                total_sales=row["total_sales"],
                avg_weekly_sales=row["mean"],
                transaction_count=row["transaction_count"],
                volatility=row["cv"],
                departments=row["departments"],
            )
        )
    return result


def aggregate_by_department(sales: Iterable[SalesRecord]) -> list[DepartmentAggregate]:
    """Sum/average/count sales per department.

    Args:
        sales: Normalized sales records.

    Returns:
        Department aggregates sorted by total sales descending.
    """
    df = sales_frame(sales)
    if df.empty:
        return []

    rollup = (
        df.groupby("dept", sort=False)
        .agg(
            total_sales=("amount", "sum"),
            avg_weekly_sales=("amount", "mean"),
            transaction_count=("amount", "size"),
            store_count=("store", "nunique"),
        )
        .reset_index()
        .sort_values(["total_sales", "dept"], ascending=[False, True])
    )
    return [DepartmentAggregate.model_validate(row) for row in rollup.to_dict(orient="records")]


def aggregate_by_store_type(
    sales: Iterable[SalesRecord],
    stores: Iterable[StoreMeta],
) -> list[StoreTypeAggregate]:
    """Roll up sales per store format.

    Only stores present in the dimension participate. Size and volatility
    are averaged per store, not per record.

    Args:
        sales: Normalized sales records.
        stores: Store dimension rows.

    Returns:
        Store-type aggregates sorted by total sales descending.
    """
    store_list = list(stores)
    known = {s.store for s in store_list}
    per_store = [s for s in aggregate_by_store(sales, store_list) if s.store in known]
    return store_type_rollup(per_store)


def store_type_rollup(per_store: Sequence[StoreAggregate]) -> list[StoreTypeAggregate]:
    """Group store aggregates by their type.

    Args:
        per_store: Store aggregates (only stores with known metadata).

    Returns:
        Store-type aggregates sorted by total sales descending.
    """
    df = records_frame(per_store, ("store", "type", "size", "total_sales", "volatility"))
    if df.empty:
        return []

    rollup = (
        df.groupby("type", sort=False)
        .agg(
            store_count=("store", "size"),
            total_sales=("total_sales", "sum"),
            avg_size=("size", "mean"),
            avg_volatility=("volatility", "mean"),
        )
        .reset_index()
    )
    rollup["avg_sales_per_store"] = rollup["total_sales"] / rollup["store_count"]
    rollup = rollup.sort_values("total_sales", ascending=False, kind="stable")
    return [StoreTypeAggregate.model_validate(row) for row in rollup.to_dict(orient="records")]


def aggregate_by_month(weekly: Iterable[WeeklyAggregate]) -> list[MonthlyAggregate]:
    """Roll weekly totals up to calendar months (years combined).

    Args:
        weekly: Weekly aggregates.

    Returns:
        One row per month present, sorted by month number.
    """
    df = records_frame(weekly, ("date", "total_sales"))
    if df.empty:
        return []

    df["month"] = pd.to_datetime(df["date"]).dt.month
    rollup = (
        df.groupby("month", sort=True)
        .agg(
            total_sales=("total_sales", "sum"),
            avg_weekly_sales=("total_sales", "mean"),
            week_count=("total_sales", "size"),
        )
        .reset_index()
    )
    rollup["month_name"] = rollup["month"].map(lambda m: MONTH_NAMES[m - 1])
    return [MonthlyAggregate.model_validate(row) for row in rollup.to_dict(orient="records")]


def aggregate_weekly_features(
    sales: Iterable[SalesRecord],
    features: Iterable[FeatureRecord],
) -> list[WeeklyFeatureAggregate]:
    """Join weekly totals with exogenous features averaged over stores.

    Features are joined on (store, date); each store reporting sales in a
    week contributes its feature row once, regardless of department count.
    When a (store, date) key repeats in features, the last row wins.

    Args:
        sales: Normalized sales records.
        features: Normalized feature records.

    Returns:
        Weekly feature aggregates sorted by date ascending.
    """
    df = sales_frame(sales)
    if df.empty:
        return []

    feats = feature_frame(features).drop_duplicates(subset=["store", "date"], keep="last")
    weekly = weekly_totals(df).drop(columns=["store_count", "avg_sales_per_store"])

    if feats.empty:
        for column in FEATURE_MEANS.values():
            weekly[column] = None
    else:
        reporting = df[["store", "date"]].drop_duplicates()
        joined = reporting.merge(feats, on=["store", "date"], how="inner")
        means = (
            joined.groupby("date")[list(FEATURE_MEANS)]
            .mean()
            .rename(columns=FEATURE_MEANS)
            .reset_index()
        )
        weekly = weekly.merge(means, on="date", how="left")

    logger.debug(
        "aggregation.weekly_features_joined",
        weeks=len(weekly),
        feature_rows=len(feats),
    )
    return [WeeklyFeatureAggregate.model_validate(row) for row in frame_rows(weekly)]
