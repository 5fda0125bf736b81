"""Metrics calculator for forecast validation.

Supported Metrics:
- MAE: Mean Absolute Error
- MAPE: Mean Absolute Percentage Error
- R2: Coefficient of determination, floored at 0
- Confidence score: clamp(100 - MAPE, 0, 100)

CRITICAL: All metrics handle edge cases (zeros, empty arrays) without
returning inf.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from storepulse.core.logging import get_logger
from storepulse.features.forecasting.schemas import ForecastMetrics

logger = get_logger(__name__)


@dataclass
class MetricResult:
    """Result of a single metric calculation.

    Attributes:
        name: Name of the metric.
        value: Calculated value (nan for empty input).
        n_samples: Number of samples used in calculation.
        warnings: List of warnings generated during calculation.
    """

    name: str
    value: float
    n_samples: int
    warnings: list[str] = field(default_factory=lambda: [])


def _check_lengths(
    actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
    predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
) -> None:
    if len(actuals) != len(predictions):
        raise ValueError(
            f"Length mismatch: actuals={len(actuals)}, predictions={len(predictions)}"
        )


class MetricsCalculator:
    """Calculate forecast accuracy metrics on a held-out window."""

    @staticmethod
    def mae(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Mean Absolute Error.

        Formula: mean(|actual - predicted|)

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with MAE value.

        Raises:
            ValueError: If arrays have different lengths.
        """
        if len(actuals) == 0:
            return MetricResult(name="mae", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        return MetricResult(
            name="mae",
            value=float(np.mean(np.abs(actuals - predictions))),
            n_samples=len(actuals),
        )

    @staticmethod
    def mape(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Mean Absolute Percentage Error.

        Formula: 100/n * sum(|A - F| / |A|)

        CRITICAL: Weeks with a zero actual are excluded from the mean; if every
        actual is zero the result is 0 with a warning.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with MAPE value (percent).

        Raises:
            ValueError: If arrays have different lengths.
        """
        warnings: list[str] = []

        if len(actuals) == 0:
            return MetricResult(name="mape", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        nonzero = actuals != 0
        n_zeros = int(np.sum(~nonzero))
        if n_zeros > 0:
            warnings.append(f"{n_zeros} samples with zero actuals excluded")

        if not np.any(nonzero):
            return MetricResult(name="mape", value=0.0, n_samples=0, warnings=warnings)

        ratios = np.abs((actuals[nonzero] - predictions[nonzero]) / actuals[nonzero])
        return MetricResult(
            name="mape",
            value=float(100.0 * np.mean(ratios)),
            n_samples=int(np.sum(nonzero)),
            warnings=warnings,
        )

    @staticmethod
    def r2(
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> MetricResult:
        """Coefficient of determination, floored at 0.

        Formula: max(0, 1 - SSE / TSS)

        CRITICAL: When TSS is 0 (constant actuals) the score is 1 for a
        perfect fit and 0 otherwise.

        Args:
            actuals: Ground truth values.
            predictions: Predicted values.

        Returns:
            MetricResult with R2 in [0, 1].

        Raises:
            ValueError: If arrays have different lengths.
        """
        warnings: list[str] = []

        if len(actuals) == 0:
            return MetricResult(name="r2", value=np.nan, n_samples=0, warnings=["Empty array"])
        _check_lengths(actuals, predictions)

        sse = float(np.sum((actuals - predictions) ** 2))
        tss = float(np.sum((actuals - np.mean(actuals)) ** 2))

        if tss == 0:
            warnings.append("Actuals are constant; R2 undefined")
            value = 1.0 if np.isclose(sse, 0.0) else 0.0
        else:
            value = max(0.0, 1.0 - sse / tss)

        return MetricResult(name="r2", value=value, n_samples=len(actuals), warnings=warnings)

    @staticmethod
    def confidence_score(mape: float) -> float:
        """Overall confidence from MAPE, clamped to 0-100."""
        return max(0.0, min(100.0, 100.0 - mape))

    def calculate_all(
        self,
        actuals: np.ndarray[Any, np.dtype[np.floating[Any]]],
        predictions: np.ndarray[Any, np.dtype[np.floating[Any]]],
    ) -> ForecastMetrics:
        """Calculate all validation metrics.

        Args:
            actuals: Ground truth values (non-empty).
            predictions: Predicted values.

        Returns:
            ForecastMetrics for the held-out window.

        Raises:
            ValueError: If arrays are empty or have different lengths.
        """
        if len(actuals) == 0:
            raise ValueError("Cannot score an empty validation window")

        mae = self.mae(actuals, predictions)
        mape = self.mape(actuals, predictions)
        r2 = self.r2(actuals, predictions)
        warnings = [f"{m.name}: {w}" for m in (mae, mape, r2) for w in m.warnings]
        if warnings:
            logger.warning(
                "forecasting.validation_warnings",
                warnings=warnings,
                n_validation=len(actuals),
            )

        return ForecastMetrics(
            mae=mae.value,
            mape=mape.value,
            r2=r2.value,
            confidence_score=self.confidence_score(mape.value),
            n_validation=len(actuals),
            warnings=warnings,
        )
