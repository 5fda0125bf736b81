"""Shared pytest fixtures for StorePulse end-to-end tests."""

from datetime import date, timedelta

import pandas as pd
import pytest

from storepulse.core.config import Settings

START = date(2011, 1, 7)


@pytest.fixture
def settings() -> Settings:
    """Fresh testing settings (not the cached singleton)."""
    return Settings(app_env="testing", log_format="console")


@pytest.fixture
def train_frame() -> pd.DataFrame:
    """A train.csv-shaped frame: 3 stores x 2 depts x 30 weeks, as strings.

    Store 3 loses half its sales in week 20. One row has a broken date.
    """
    rows = []
    for week in range(30):
        day = START + timedelta(weeks=week)
        for store in (1, 2, 3):
            for dept in (1, 2):
                amount = 1000.0 * store + 10 * week + dept
                if store == 3 and week == 20:
                    amount /= 2
                rows.append(
                    {
                        "Store": str(store),
                        "Dept": str(dept),
                        "Date": day.isoformat(),
                        "Weekly_Sales": f"{amount:.2f}",
                        "IsHoliday": "TRUE" if (day.month, day.day) == (2, 11) else "FALSE",
                    }
                )
    rows.append(
        {"Store": "1", "Dept": "1", "Date": "not-a-date", "Weekly_Sales": "5", "IsHoliday": "FALSE"}
    )
    return pd.DataFrame(rows)


@pytest.fixture
def stores_frame() -> pd.DataFrame:
    """A stores.csv-shaped frame."""
    return pd.DataFrame(
        {"Store": [1, 2, 3], "Type": ["A", "B", "C"], "Size": [151315, 202307, 37392]}
    )


@pytest.fixture
def features_frame() -> pd.DataFrame:
    """A features.csv-shaped frame with NA markdowns for store 1."""
    return pd.DataFrame(
        {
            "Store": [1] * 30,
            "Date": [(START + timedelta(weeks=w)).isoformat() for w in range(30)],
            "Temperature": [40.0 + w for w in range(30)],
            "Fuel_Price": [3.0] * 30,
            "MarkDown1": ["NA"] * 29 + ["500"],
            "MarkDown2": ["NA"] * 30,
            "MarkDown3": ["NA"] * 30,
            "MarkDown4": ["NA"] * 30,
            "MarkDown5": ["NA"] * 30,
            "CPI": [211.1] * 30,
            "Unemployment": [8.1] * 30,
            "IsHoliday": ["FALSE"] * 30,
        }
    )
