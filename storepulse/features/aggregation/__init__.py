"""Aggregation module: grouped rollups by store, department, week, type and month.

Exports:
    Engine:
        - AggregationEngine: Single interface consumed by the detectors
        - AggregationProvider: Protocol for view sources
        - RecordAggregationProvider: Computes views from raw records
        - PreAggregatedProvider: Adapts pre-grouped rows

    Functions:
        - aggregate_by_week, aggregate_by_store, aggregate_by_department
        - aggregate_by_store_type, aggregate_by_month, aggregate_weekly_features
"""

from storepulse.features.aggregation.providers import (
    AggregateSnapshot,
    AggregationEngine,
    AggregationProvider,
    PreAggregatedProvider,
    RecordAggregationProvider,
)
from storepulse.features.aggregation.schemas import (
    DepartmentAggregate,
    MonthlyAggregate,
    StoreAggregate,
    StoreTypeAggregate,
    WeeklyAggregate,
    WeeklyFeatureAggregate,
)
from storepulse.features.aggregation.service import (
    aggregate_by_department,
    aggregate_by_month,
    aggregate_by_store,
    aggregate_by_store_type,
    aggregate_by_week,
    aggregate_weekly_features,
    store_type_rollup,
)

__all__ = [
    "AggregateSnapshot",
    "AggregationEngine",
    "AggregationProvider",
    "DepartmentAggregate",
    "MonthlyAggregate",
    "PreAggregatedProvider",
    "RecordAggregationProvider",
    "StoreAggregate",
    "StoreTypeAggregate",
    "WeeklyAggregate",
    "WeeklyFeatureAggregate",
    "aggregate_by_department",
    "aggregate_by_month",
    "aggregate_by_store",
    "aggregate_by_store_type",
    "aggregate_by_week",
    "aggregate_weekly_features",
    "store_type_rollup",
]
