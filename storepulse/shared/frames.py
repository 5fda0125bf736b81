"""DataFrame views over normalized records.

Grouped computations in the features run on these frames. Date columns keep
``datetime.date`` objects (object dtype) so grouped keys validate straight
back into the pydantic schemas.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import pandas as pd
from pydantic import BaseModel

SALES_COLUMNS: tuple[str, ...] = ("store", "dept", "date", "amount", "is_holiday")
FEATURE_COLUMNS: tuple[str, ...] = (
    "store",
    "date",
    "temperature",
    "fuel_price",
    "cpi",
    "unemployment",
)


def records_frame(records: Iterable[BaseModel], columns: Sequence[str]) -> pd.DataFrame:
    """Build a frame with one row per record.

    Args:
        records: Pydantic models exposing every name in columns.
        columns: Fields to keep, in output order.

    Returns:
        DataFrame with exactly the requested columns (empty when no records).
    """
    fields = set(columns)
    return pd.DataFrame(
        [record.model_dump(include=fields) for record in records],
        columns=list(columns),
    )


def sales_frame(sales: Iterable[BaseModel]) -> pd.DataFrame:
    """Frame of sales records: store, dept, date, amount, is_holiday."""
    return records_frame(sales, SALES_COLUMNS)


def feature_frame(features: Iterable[BaseModel]) -> pd.DataFrame:
    """Frame of feature records with the four numeric exogenous columns."""
    return records_frame(features, FEATURE_COLUMNS)


def frame_rows(df: pd.DataFrame) -> list[dict[str, object]]:
    """Rows of a frame as plain dicts, NaN replaced by None."""
    return df.astype(object).where(df.notna(), None).to_dict(orient="records")
