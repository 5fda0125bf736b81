"""Feature-specific test fixtures for ingest module."""

from typing import Any

import pandas as pd
import pytest


def _sales_row(store: str, dept: str, day: str, sales: str, holiday: str) -> dict[str, Any]:
    return {"Store": store, "Dept": dept, "Date": day, "Weekly_Sales": sales, "IsHoliday": holiday}


@pytest.fixture
def raw_sales_rows() -> list[dict[str, Any]]:
    """Raw sales rows as read from train.csv (strings everywhere)."""
    return [
        _sales_row("1", "1", "2010-02-05", "24924.5", "FALSE"),
        _sales_row("1", "1", "2010-02-12", "46039.49", "TRUE"),
        _sales_row("1", "2", "2010-02-12", "oops", "true"),
        _sales_row("", "1", "2010-02-19", "100", "FALSE"),
        _sales_row("2", "-3", "2010-02-19", "100", "FALSE"),
        _sales_row("2", "3", "02/19/2010", "100", "FALSE"),
    ]


@pytest.fixture
def raw_feature_rows() -> list[dict[str, Any]]:
    """Raw feature rows with NA markdowns and a broken CPI."""
    return [
        {
            "Store": "1",
            "Date": "2010-02-05",
            "Temperature": "42.31",
            "Fuel_Price": "2.572",
            "MarkDown1": "NA",
            "MarkDown2": "NA",
            "MarkDown3": "NA",
            "MarkDown4": "NA",
            "MarkDown5": "NA",
            "CPI": "211.0963582",
            "Unemployment": "8.106",
            "IsHoliday": "FALSE",
        },
        {
            "Store": "1",
            "Date": "2011-11-11",
            "Temperature": "59.11",
            "Fuel_Price": "3.297",
            "MarkDown1": "10382.9",
            "MarkDown2": "6115.67",
            "MarkDown3": "215.07",
            "MarkDown4": "2406.62",
            "MarkDown5": "6551.42",
            "CPI": "NA",
            "Unemployment": "7.866",
            "IsHoliday": "FALSE",
        },
    ]


@pytest.fixture
def raw_store_rows() -> list[dict[str, Any]]:
    """Raw store dimension rows, one with an unknown type."""
    return [
        {"Store": "1", "Type": "A", "Size": "151315"},
        {"Store": "2", "Type": "b", "Size": "202307"},
        {"Store": "3", "Type": "D", "Size": "37392"},
        {"Store": "4", "Type": "C", "Size": "big"},
    ]


@pytest.fixture
def sales_frame() -> pd.DataFrame:
    """Sales DataFrame with native dtypes and a missing amount."""
    return pd.DataFrame(
        {
            "Store": [1, 1, 2],
            "Dept": [1, 2, 1],
            "Date": pd.to_datetime(["2010-02-05", "2010-02-05", "2010-02-12"]),
            "Weekly_Sales": [100.0, float("nan"), 250.5],
            "IsHoliday": [False, False, True],
        }
    )
