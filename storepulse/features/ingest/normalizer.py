"""Record normalizer: maps raw tabular rows onto the record schemas.

Per-field policy (declared on the schema fields, applied consistently):

    store, dept, size       reject row if missing, non-integer or negative
    date                    reject row if missing or not ISO-8601 (YYYY-MM-DD)
    type                    reject row unless one of A, B, C
    amount                  coerce: unparseable or missing -> 0.0
    temperature, fuel_price,
    cpi, unemployment       coerce: unparseable or missing -> 0.0
    markdown1..5            coerce: NA, empty or unparseable -> None
    is_holiday              coerce: "TRUE" (any case), True or 1 -> True, else False

Rows may use the raw column names (``Weekly_Sales``, ``IsHoliday`` ...) or
their snake_case equivalents. A row failing validation becomes a RowError
built from the first pydantic error.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from storepulse.core.logging import get_logger
from storepulse.features.ingest.schemas import (
    FeatureRecord,
    NormalizationResult,
    RowError,
    SalesRecord,
    StoreMeta,
    is_missing,
    parse_boolean,
    parse_nullable_number,
    parse_number,
)
from storepulse.shared.frames import frame_rows

__all__ = [
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

logger = get_logger(__name__)

_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "store": ("Store", "store"),
    "dept": ("Dept", "dept"),
    "date": ("Date", "date"),
    "amount": ("Weekly_Sales", "weekly_sales", "amount"),
    "is_holiday": ("IsHoliday", "is_holiday"),
    "temperature": ("Temperature", "temperature"),
    "fuel_price": ("Fuel_Price", "fuel_price"),
    "cpi": ("CPI", "cpi"),
    "unemployment": ("Unemployment", "unemployment"),
    "type": ("Type", "type"),
    "size": ("Size", "size"),
}

MARKDOWN_COLUMNS = tuple(f"MarkDown{i}" for i in range(1, 6))

# pydantic error type -> RowError.error_code
_ERROR_CODES: dict[str, str] = {
    "missing": "MISSING_FIELD",
    "int_parsing": "NOT_AN_INTEGER",
    "int_from_float": "NOT_AN_INTEGER",
    "int_type": "NOT_AN_INTEGER",
    "greater_than_equal": "NEGATIVE_VALUE",
    "enum": "INVALID_STORE_TYPE",
    "value_error": "INVALID_DATE",
    "date_parsing": "INVALID_DATE",
    "date_type": "INVALID_DATE",
    "date_from_datetime_inexact": "INVALID_DATE",
}


# =============================================================================
# Row canonicalization
# =============================================================================


def _lookup(row: Mapping[str, Any], name: str) -> Any:  # noqa: ANN401
    for key in _COLUMN_ALIASES.get(name, (name,)):
        if key in row:
            return row[key]
    return None


def _canonical(row: Mapping[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Map raw column names to field names, dropping missing values.

    Dropped required fields surface as "missing" errors; dropped coerce
    fields fall back to their schema defaults.
    """
    values = {name: _lookup(row, name) for name in fields}
    return {name: value for name, value in values.items() if not is_missing(value)}


def _sales_input(row: Mapping[str, Any]) -> dict[str, Any]:
    return _canonical(row, ("store", "dept", "date", "amount", "is_holiday"))


def _feature_input(row: Mapping[str, Any]) -> dict[str, Any]:
    data = _canonical(
        row,
        ("store", "date", "temperature", "fuel_price", "cpi", "unemployment", "is_holiday"),
    )
    data["markdowns"] = tuple(row.get(c, row.get(c.lower())) for c in MARKDOWN_COLUMNS)
    return data


def _store_input(row: Mapping[str, Any]) -> dict[str, Any]:
    return _canonical(row, ("store", "type", "size"))


def _row_error(index: int, exc: ValidationError) -> RowError:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else "row"
    if error["type"] == "missing":
        message = f"{field} is required"
    else:
        message = f"{field}={error.get('input')!r}: {error['msg']}"
    return RowError(
        row_index=index,
        field=field,
        error_code=_ERROR_CODES.get(error["type"], "INVALID_VALUE"),
        message=message,
    )


T = TypeVar("T", bound=BaseModel)


def _normalize(
    rows: Iterable[Mapping[str, Any]],
    model: type[T],
    to_input: Callable[[Mapping[str, Any]], dict[str, Any]],
    kind: str,
) -> tuple[list[T], list[RowError]]:
    records: list[T] = []
    rejected: list[RowError] = []

    for index, row in enumerate(rows):
        try:
            records.append(model.model_validate(to_input(row)))
        except ValidationError as exc:
            rejected.append(_row_error(index, exc))

    if rejected:
        logger.warning(
            "ingest.rows_rejected",
            kind=kind,
            rejected_count=len(rejected),
            error_codes=sorted({e.error_code for e in rejected}),
        )

    logger.debug(
        "ingest.normalized",
        kind=kind,
        accepted_count=len(records),
        rejected_count=len(rejected),
    )

    return records, rejected


# =============================================================================
# Public API
# =============================================================================


def normalize_sales_rows(
    rows: Iterable[Mapping[str, Any]],
) -> NormalizationResult[SalesRecord]:
    """Normalize raw sales rows into SalesRecords.

    Args:
        rows: Mappings with Store, Dept, Date, Weekly_Sales, IsHoliday.

    Returns:
        Accepted records plus per-row rejection details.
    """
    records, rejected = _normalize(rows, SalesRecord, _sales_input, "sales")
    return NormalizationResult[SalesRecord](records=records, rejected=rejected)


def normalize_feature_rows(
    rows: Iterable[Mapping[str, Any]],
) -> NormalizationResult[FeatureRecord]:
    """Normalize raw feature rows into FeatureRecords.

    Args:
        rows: Mappings with Store, Date, Temperature, Fuel_Price, CPI,
            Unemployment, MarkDown1..5, IsHoliday.

    Returns:
        Accepted records plus per-row rejection details.
    """
    records, rejected = _normalize(rows, FeatureRecord, _feature_input, "features")
    return NormalizationResult[FeatureRecord](records=records, rejected=rejected)


def normalize_store_rows(
    rows: Iterable[Mapping[str, Any]],
) -> NormalizationResult[StoreMeta]:
    """Normalize raw store dimension rows into StoreMeta."""
    records, rejected = _normalize(rows, StoreMeta, _store_input, "stores")
    return NormalizationResult[StoreMeta](records=records, rejected=rejected)


def normalize_sales_frame(df: pd.DataFrame) -> NormalizationResult[SalesRecord]:
    """Normalize a sales DataFrame (e.g. read by the caller from train.csv)."""
    return normalize_sales_rows(frame_rows(df))


def normalize_feature_frame(df: pd.DataFrame) -> NormalizationResult[FeatureRecord]:
    """Normalize a features DataFrame."""
    return normalize_feature_rows(frame_rows(df))


def normalize_store_frame(df: pd.DataFrame) -> NormalizationResult[StoreMeta]:
    """Normalize a stores DataFrame."""
    return normalize_store_rows(frame_rows(df))
