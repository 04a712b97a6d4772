"""Collector interfaces and implementations for gridpulse metrics."""

from .base import BaseMetricsCollector
from .map_info import MapInfoCollector, collect_map_metrics
from .registry import MetricsCollectorRegistry

__all__ = [
    "BaseMetricsCollector",
    "MapInfoCollector",
    "MetricsCollectorRegistry",
    "collect_map_metrics",
]
