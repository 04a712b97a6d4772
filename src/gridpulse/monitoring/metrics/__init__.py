"""Metrics collection for distributed maps."""

from .collectors import (
    BaseMetricsCollector,
    MapInfoCollector,
    MetricsCollectorRegistry,
    collect_map_metrics,
)
from .config_index import build_config_index
from .latency import LATENCY_CATALOG, NO_DATA, LatencyInfo, aggregate_latency
from .models import Metric, MetricLabel, MetricType, MetricUnit, MetricValue
from .predicates import PREDICATE_CATALOG, MapPredicate, count_matching, negate

__all__ = [
    "BaseMetricsCollector",
    "LATENCY_CATALOG",
    "LatencyInfo",
    "MapInfoCollector",
    "MapPredicate",
    "Metric",
    "MetricLabel",
    "MetricType",
    "MetricUnit",
    "MetricValue",
    "MetricsCollectorRegistry",
    "NO_DATA",
    "PREDICATE_CATALOG",
    "aggregate_latency",
    "build_config_index",
    "collect_map_metrics",
    "count_matching",
    "negate",
]
