"""Descriptive statistics shared by the aggregation and detection features.

CRITICAL: Degenerate inputs never produce nan or inf. Empty arrays and
non-positive means fall back to 0.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Quartiles:
    """Quartiles taken at sorted index floor(n * p), without interpolation."""

    q1: float
    median: float
    q3: float

    @property
    def iqr(self) -> float:
        """Interquartile range (Q3 - Q1)."""
        return self.q3 - self.q1


def grouped_spread(frame: pd.DataFrame, by: str | list[str], column: str) -> pd.DataFrame:
    """Mean, population std and CV% of one column per group.

    Formula: cv = std / mean * 100

    Single-row groups have std 0 and groups with a non-positive mean have
    CV 0.

    Args:
        frame: Input rows.
        by: Grouping column(s).
        column: Value column.

    Returns:
        Frame indexed by the group keys with columns mean, std_dev and cv.
    """
    grouped = frame.groupby(by, sort=False)[column]
    result = pd.DataFrame({"mean": grouped.mean(), "std_dev": grouped.std(ddof=0)})
    result["cv"] = (result["std_dev"] / result["mean"] * 100.0).where(result["mean"] > 0, 0.0)
    return result


def lower_quartiles(values: Sequence[float]) -> Quartiles:
    """Quartiles using the lower-value-at-floor(n * p) convention.

    For n=12 the quartiles are sorted[3], sorted[6] and sorted[9].

    Args:
        values: Non-empty sample.

    Returns:
        Quartiles of the sample.

    Raises:
        ValueError: If values is empty.
    """
    n = len(values)
    if n == 0:
        raise ValueError("Cannot compute quartiles of an empty sample")

    ordered = np.sort(np.asarray(values, dtype=np.float64))
    return Quartiles(
        q1=float(ordered[int(n * 0.25)]),
        median=float(ordered[int(n * 0.5)]),
        q3=float(ordered[int(n * 0.75)]),
    )
