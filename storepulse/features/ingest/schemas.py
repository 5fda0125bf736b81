"""Pydantic schemas for normalized input records.

Records are immutable once normalized (frozen=True). The per-field ingest
policy lives on the fields themselves:

- Reject fields (ids, size, date, type) use plain constraints, so a bad
  value raises ValidationError.
- Coerce fields (amounts, features, markdowns, holiday flag) carry a
  BeforeValidator that maps anything unparseable to the documented default.

Collaborators that already hold typed data may construct these models
directly instead of going through the normalizer.
"""

from __future__ import annotations

import math
import numbers
from datetime import date as date_type
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Generic, TypeVar

import numpy as np
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

_NULL_TOKENS = frozenset({"", "NA", "N/A", "NAN", "NULL", "NONE"})


def is_missing(value: Any) -> bool:  # noqa: ANN401
    """Check for None, NaN or a textual null token such as "NA"."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip().upper() in _NULL_TOKENS


def parse_boolean(value: Any) -> bool:  # noqa: ANN401
    """Coerce a raw holiday flag; anything unrecognised is False."""
    if isinstance(value, bool | np.bool_):
        return bool(value)
    if isinstance(value, numbers.Real) and not is_missing(value):
        return value == 1
    if isinstance(value, str):
        return value.strip().upper() in {"TRUE", "1"}
    return False


def parse_nullable_number(value: Any) -> float | None:  # noqa: ANN401
    """Coerce to float; NA, empty or unparseable values become None."""
    if is_missing(value) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_number(value: Any) -> float:  # noqa: ANN401
    """Coerce to float; unparseable or missing values become 0.0."""
    parsed = parse_nullable_number(value)
    return 0.0 if parsed is None else parsed


def parse_iso_date(value: Any) -> Any:  # noqa: ANN401
    """Accept dates, datetimes and ISO-8601 strings only.

    Raises:
        ValueError: For any other string (e.g. 02/19/2010) or type.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if isinstance(value, str):
        return date_type.fromisoformat(value.strip())
    raise ValueError(f"expected an ISO-8601 date, got {type(value).__name__}")


def _upper(value: Any) -> Any:  # noqa: ANN401
    return value.strip().upper() if isinstance(value, str) else value


CoercedFloat = Annotated[float, BeforeValidator(parse_number)]
NullableFloat = Annotated[float | None, BeforeValidator(parse_nullable_number)]
HolidayFlag = Annotated[bool, BeforeValidator(parse_boolean)]
IsoDate = Annotated[date_type, BeforeValidator(parse_iso_date)]


class StoreType(str, Enum):
    """Store format classification."""

    A = "A"
    B = "B"
    C = "C"


class SalesRecord(BaseModel):
    """Weekly sales of one department in one store."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    store: int = Field(..., ge=0, description="Store identifier")
    dept: int = Field(..., ge=0, description="Department identifier")
    date: IsoDate = Field(..., description="Week date (weekly granularity)")
    amount: CoercedFloat = Field(
        default=0.0, description="Weekly sales amount (may be negative for returns)"
    )
    is_holiday: HolidayFlag = Field(default=False, description="Week contains a holiday")


class FeatureRecord(BaseModel):
    """Exogenous weekly features for one store.

    Joined to sales by (store, date); not every sales key has a feature row.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    store: int = Field(..., ge=0)
    date: IsoDate
    temperature: CoercedFloat = 0.0
    fuel_price: CoercedFloat = 0.0
    cpi: CoercedFloat = 0.0
    unemployment: CoercedFloat = 0.0
    markdowns: tuple[NullableFloat, ...] = Field(
        default=(),
        max_length=5,
        description="Promotional markdowns MarkDown1..5; None when not reported",
    )
    is_holiday: HolidayFlag = False

    @property
    def total_markdown(self) -> float:
        """Sum of reported markdowns (missing ones count as 0)."""
        return sum(m for m in self.markdowns if m is not None)


class StoreMeta(BaseModel):
    """Read-only store dimension row."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    store: int = Field(..., ge=0)
    type: Annotated[StoreType, BeforeValidator(_upper)]
    size: int = Field(..., ge=0, description="Store size in square feet")


class RowError(BaseModel):
    """Error detail for a single rejected row."""

    row_index: int = Field(..., description="0-based index of the rejected row")
    field: str = Field(..., description="Field that failed validation")
    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


RecordT = TypeVar("RecordT", bound=BaseModel)


class NormalizationResult(BaseModel, Generic[RecordT]):
    """Outcome of normalizing a batch of raw rows."""

    records: list[RecordT] = Field(default_factory=list)
    rejected: list[RowError] = Field(default_factory=list)

    @property
    def accepted_count(self) -> int:
        """Number of rows that produced a record."""
        return len(self.records)

    @property
    def rejected_count(self) -> int:
        """Number of rows rejected."""
        return len(self.rejected)
