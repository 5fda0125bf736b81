"""Ingest module: normalizes raw tabular rows into typed records."""

from storepulse.features.ingest.normalizer import (
    normalize_feature_frame,
    normalize_feature_rows,
    normalize_sales_frame,
    normalize_sales_rows,
    normalize_store_frame,
    normalize_store_rows,
    parse_boolean,
    parse_nullable_number,
    parse_number,
)
from storepulse.features.ingest.schemas import (
    FeatureRecord,
    NormalizationResult,
    RowError,
    SalesRecord,
    StoreMeta,
    StoreType,
)

__all__ = [
    "FeatureRecord",
    "NormalizationResult",
    "RowError",
    "SalesRecord",
    "StoreMeta",
    "StoreType",
    "normalize_feature_frame",
    "normalize_feature_rows",
    "normalize_sales_frame",
    "normalize_sales_rows",
    "normalize_store_frame",
    "normalize_store_rows",
    "parse_boolean",
    "parse_nullable_number",
    "parse_number",
]
