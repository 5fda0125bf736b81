"""Per-store volatility and risk tiering.

Risk tiers are fixed business rules on the coefficient of variation:

    cv <  medium_threshold               -> low
    medium_threshold <= cv < high        -> medium
    cv >= high_threshold                 -> high
"""

from __future__ import annotations

from collections.abc import Iterable

from storepulse.core.constants import RISK_HIGH_THRESHOLD, RISK_MEDIUM_THRESHOLD
from storepulse.core.exceptions import InvalidInputError
from storepulse.core.logging import get_logger
from storepulse.features.aggregation.service import DEFAULT_STORE_TYPE
from storepulse.features.ingest.schemas import SalesRecord, StoreMeta
from storepulse.features.volatility.schemas import RiskCounts, RiskTier, StoreVolatility
from storepulse.shared.frames import sales_frame
from storepulse.shared.stats import grouped_spread

logger = get_logger(__name__)


def classify_risk(
    cv: float,
    medium_threshold: float = RISK_MEDIUM_THRESHOLD,
    high_threshold: float = RISK_HIGH_THRESHOLD,
) -> RiskTier:
    """Bucket a coefficient of variation into a risk tier.

    Boundaries are closed on the upper tier: exactly 30.0 is medium and
    exactly 50.0 is high with the default thresholds.

    Args:
        cv: Coefficient of variation in percent.
        medium_threshold: Lower bound of the medium tier.
        high_threshold: Lower bound of the high tier.

    Returns:
        The risk tier.

    Raises:
        InvalidInputError: If medium_threshold >= high_threshold.
    """
    if medium_threshold >= high_threshold:
        raise InvalidInputError(
            "medium_threshold must be lower than high_threshold",
            details={"medium_threshold": medium_threshold, "high_threshold": high_threshold},
        )
    if cv >= high_threshold:
        return RiskTier.HIGH
    if cv >= medium_threshold:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def calculate_store_volatility(
    sales: Iterable[SalesRecord],
    stores: Iterable[StoreMeta] = (),
    medium_threshold: float = RISK_MEDIUM_THRESHOLD,
    high_threshold: float = RISK_HIGH_THRESHOLD,
) -> list[StoreVolatility]:
    """Compute mean, population std, CV and risk tier per store.

    Args:
        sales: Normalized sales records.
        stores: Store dimension rows (type defaults to A when missing).
        medium_threshold: Lower bound of the medium tier.
        high_threshold: Lower bound of the high tier.

    Returns:
        Store volatility rows sorted by CV descending.
    """
    df = sales_frame(sales)
    if df.empty:
        logger.info("volatility.classified", stores=0, low=0, medium=0, high=0)
        return []

    meta = {s.store: s for s in stores}
    spreads = (
        grouped_spread(df, "store", "amount")
        .reset_index()
        .sort_values(["cv", "store"], ascending=[False, True])
    )

    result: list[StoreVolatility] = []
    for row in spreads.to_dict(orient="records"):
        info = meta.get(row["store"])
        result.append(
            StoreVolatility(
                store=row["store"],
                type=info.type if info else DEFAULT_STORE_TYPE,
                mean=row["mean"],
                std_dev=row["std_dev"],
                coefficient_of_variation=row["cv"],
                risk=classify_risk(row["cv"], medium_threshold, high_threshold),
            )
        )

    counts = count_risk_tiers(result)
    logger.info(
        "volatility.classified",
        stores=len(result),
        low=counts.low,
        medium=counts.medium,
        high=counts.high,
    )
    return result


def count_risk_tiers(volatility: Iterable[StoreVolatility]) -> RiskCounts:
    """Count stores per risk tier."""
    counts = {tier: 0 for tier in RiskTier}
    for row in volatility:
        counts[row.risk] += 1
    return RiskCounts(
        low=counts[RiskTier.LOW],
        medium=counts[RiskTier.MEDIUM],
        high=counts[RiskTier.HIGH],
    )
