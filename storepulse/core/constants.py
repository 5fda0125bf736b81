"""Named business constants shared by the analytics features.

These are business rules, not statistically derived values. They seed the
defaults in ``Settings`` and every operation accepts an override.
"""

from typing import Final

# Outlier detection
IQR_MULTIPLIER: Final[float] = 1.5
MIN_GROUP_SIZE: Final[int] = 10
WEEKLY_ZSCORE_SIGMA: Final[float] = 1.5

# Volatility risk tiers (coefficient of variation, %)
RISK_MEDIUM_THRESHOLD: Final[float] = 30.0
RISK_HIGH_THRESHOLD: Final[float] = 50.0

# Week-over-week alerts (% change)
DROP_ALERT_THRESHOLD: Final[float] = -20.0

# Forecasting
FORECAST_HORIZON_WEEKS: Final[int] = 12
VALIDATION_SPLIT: Final[float] = 0.8
BASE_LEVEL_WINDOW: Final[int] = 4
BASE_WEIGHT: Final[float] = 0.7
CONFIDENCE_BAND: Final[float] = 0.10
DEFAULT_HOLIDAY_FACTOR: Final[float] = 1.1
TREND_LABEL_BAND_PCT: Final[float] = 2.0

# Approximate US holiday weeks as (month, week-of-month) pairs:
# Super Bowl, Labor Day, Thanksgiving, Christmas.
HOLIDAY_WEEKS: Final[tuple[tuple[int, int], ...]] = (
    (2, 2),
    (9, 1),
    (11, 4),
    (12, 4),
)

MONTH_NAMES: Final[tuple[str, ...]] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
