"""Shared helpers used across features."""

from storepulse.shared.frames import feature_frame, frame_rows, records_frame, sales_frame
from storepulse.shared.stats import Quartiles, grouped_spread, lower_quartiles

__all__ = [
    "Quartiles",
    "feature_frame",
    "frame_rows",
    "grouped_spread",
    "lower_quartiles",
    "records_frame",
    "sales_frame",
]
