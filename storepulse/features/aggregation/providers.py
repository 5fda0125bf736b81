"""Input providers behind the single aggregation interface.

Two providers satisfy the same contract:

- RecordAggregationProvider: computes every view in-process from raw records.
- PreAggregatedProvider: adapts rows that were already grouped upstream (for
  example by grouped SQL queries) into the same schemas.

Downstream detectors depend on AggregationEngine only, never on which
provider produced the views.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from storepulse.core.logging import get_logger
from storepulse.features.aggregation.schemas import (
    DepartmentAggregate,
    MonthlyAggregate,
    StoreAggregate,
    StoreTypeAggregate,
    WeeklyAggregate,
)
from storepulse.features.aggregation.service import (
    DEFAULT_STORE_TYPE,
    aggregate_by_department,
    aggregate_by_month,
    aggregate_by_store,
    aggregate_by_week,
    store_type_rollup,
)
from storepulse.features.ingest.schemas import SalesRecord, StoreMeta

logger = get_logger(__name__)


@runtime_checkable
class AggregationProvider(Protocol):
    """Protocol for sources of the aggregate views."""

    def by_week(self) -> list[WeeklyAggregate]:
        """Weekly totals sorted by date ascending."""
        ...

    def by_store(self) -> list[StoreAggregate]:
        """Store rollups sorted by total sales descending."""
        ...

    def by_department(self) -> list[DepartmentAggregate]:
        """Department rollups sorted by total sales descending."""
        ...

    def by_store_type(self) -> list[StoreTypeAggregate]:
        """Store-type rollups sorted by total sales descending."""
        ...

    def by_month(self) -> list[MonthlyAggregate]:
        """Calendar-month rollups sorted by month."""
        ...


class RecordAggregationProvider:
    """Computes aggregate views from normalized records."""

    def __init__(
        self,
        sales: Iterable[SalesRecord],
        stores: Iterable[StoreMeta] = (),
    ) -> None:
        """Snapshot the inputs.

        Args:
            sales: Normalized sales records.
            stores: Store dimension rows.
        """
        self._sales = tuple(sales)
        self._stores = tuple(stores)

    def by_week(self) -> list[WeeklyAggregate]:
        return aggregate_by_week(self._sales)

    def by_store(self) -> list[StoreAggregate]:
        return aggregate_by_store(self._sales, self._stores)

    def by_department(self) -> list[DepartmentAggregate]:
        return aggregate_by_department(self._sales)

    def by_store_type(self) -> list[StoreTypeAggregate]:
        known = {s.store for s in self._stores}
        return store_type_rollup([s for s in self.by_store() if s.store in known])

    def by_month(self) -> list[MonthlyAggregate]:
        return aggregate_by_month(self.by_week())


class PreAggregatedProvider:
    """Adapts pre-grouped rows into the aggregate schemas.

    Expected row keys mirror grouped-query output columns:

        weekly:      date, total_sales, store_count, is_holiday
        stores:      store, type, size, total_sales, avg_weekly_sales,
                     transaction_count, volatility, departments
        departments: dept, total_sales, avg_weekly_sales, transaction_count,
                     store_count

    Numeric columns may arrive as Decimal or str and are coerced. Null store
    type, size or volatility fall back to A, 0 and 0. Volatility is forced to
    0 when the store's average is not positive, as the record provider does.
    Store-type and monthly views are derived with the same formulas the
    record provider uses.
    """

    def __init__(
        self,
        weekly_rows: Iterable[Mapping[str, Any]] = (),
        store_rows: Iterable[Mapping[str, Any]] = (),
        department_rows: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        store_rows = tuple(store_rows)
        self._weekly = tuple(self._weekly_from_row(r) for r in weekly_rows)
        self._stores = tuple(self._store_from_row(r) for r in store_rows)
        # Rows with a null type had no dimension match upstream
        self._typed_stores = tuple(
            store
            for store, row in zip(self._stores, store_rows, strict=True)
            if row.get("type") is not None
        )
        self._departments = tuple(
            DepartmentAggregate.model_validate(dict(r)) for r in department_rows
        )

        logger.debug(
            "aggregation.pre_aggregated_loaded",
            weeks=len(self._weekly),
            stores=len(self._stores),
            departments=len(self._departments),
        )

    @staticmethod
    def _weekly_from_row(row: Mapping[str, Any]) -> WeeklyAggregate:
        total = float(row["total_sales"])
        store_count = int(row["store_count"])
        return WeeklyAggregate(
            date=row["date"],
            total_sales=total,
            store_count=store_count,
            is_holiday=row.get("is_holiday") or False,
            avg_sales_per_store=total / store_count if store_count > 0 else 0.0,
        )

    @staticmethod
    def _store_from_row(row: Mapping[str, Any]) -> StoreAggregate:
        avg_sales = float(row["avg_weekly_sales"])
        # STDDEV / AVG goes negative for net-negative stores; CV is 0 there
        volatility = float(row.get("volatility") or 0.0)
        if avg_sales <= 0 or volatility < 0:
            volatility = 0.0

        return StoreAggregate(
            store=int(row["store"]),
            type=row.get("type") or DEFAULT_STORE_TYPE,
            size=int(row.get("size") or 0),
            total_sales=float(row["total_sales"]),
            avg_weekly_sales=avg_sales,
            transaction_count=int(row["transaction_count"]),
            volatility=volatility,
            departments=tuple(sorted(row.get("departments") or ())),
        )

    def by_week(self) -> list[WeeklyAggregate]:
        return sorted(self._weekly, key=lambda w: w.date)

    def by_store(self) -> list[StoreAggregate]:
        return sorted(self._stores, key=lambda s: (-s.total_sales, s.store))

    def by_department(self) -> list[DepartmentAggregate]:
        return sorted(self._departments, key=lambda d: (-d.total_sales, d.dept))

    def by_store_type(self) -> list[StoreTypeAggregate]:
        return store_type_rollup(self._typed_stores)

    def by_month(self) -> list[MonthlyAggregate]:
        return aggregate_by_month(self.by_week())


class AggregateSnapshot(BaseModel):
    """All aggregate views computed in one cycle."""

    model_config = ConfigDict(frozen=True)

    weekly: list[WeeklyAggregate] = Field(default_factory=list)
    stores: list[StoreAggregate] = Field(default_factory=list)
    departments: list[DepartmentAggregate] = Field(default_factory=list)
    store_types: list[StoreTypeAggregate] = Field(default_factory=list)
    months: list[MonthlyAggregate] = Field(default_factory=list)


class AggregationEngine:
    """Single aggregation interface consumed by the detectors.

    Example:
        >>> engine = AggregationEngine(RecordAggregationProvider(sales, stores))
        >>> weekly = engine.weekly()
    """

    def __init__(self, provider: AggregationProvider) -> None:
        """Initialize the engine.

        Args:
            provider: Source of the aggregate views.
        """
        self.provider = provider

    @classmethod
    def from_records(
        cls,
        sales: Iterable[SalesRecord],
        stores: Iterable[StoreMeta] = (),
    ) -> AggregationEngine:
        """Build an engine over raw records."""
        return cls(RecordAggregationProvider(sales, stores))

    def weekly(self) -> list[WeeklyAggregate]:
        return self.provider.by_week()

    def stores(self) -> list[StoreAggregate]:
        return self.provider.by_store()

    def departments(self) -> list[DepartmentAggregate]:
        return self.provider.by_department()

    def store_types(self) -> list[StoreTypeAggregate]:
        return self.provider.by_store_type()

    def months(self) -> list[MonthlyAggregate]:
        return self.provider.by_month()

    def snapshot(self) -> AggregateSnapshot:
        """Compute all five views.

        Returns:
            AggregateSnapshot with weekly, store, department, store-type and
            monthly rollups.
        """
        snapshot = AggregateSnapshot(
            weekly=self.weekly(),
            stores=self.stores(),
            departments=self.departments(),
            store_types=self.store_types(),
            months=self.months(),
        )
        logger.info(
            "aggregation.snapshot_computed",
            weeks=len(snapshot.weekly),
            stores=len(snapshot.stores),
            departments=len(snapshot.departments),
            total_sales=sum(w.total_sales for w in snapshot.weekly),
        )
        return snapshot
