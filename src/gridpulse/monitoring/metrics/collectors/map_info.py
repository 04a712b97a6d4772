"""Distributed map metrics collector."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from gridpulse.cluster.interfaces import ClusterView
from gridpulse.config.settings import CollectorSettings
from gridpulse.core.exceptions import ClusterAccessError, MetricsCollectionError
from gridpulse.core.models import MapConfig
from gridpulse.monitoring.metrics.config_index import build_config_index
from gridpulse.monitoring.metrics.latency import LATENCY_CATALOG, LatencyMetric, aggregate_latency
from gridpulse.monitoring.metrics.models import MetricType, MetricUnit
from gridpulse.monitoring.metrics.predicates import PREDICATE_CATALOG, count_matching

from .base import BaseMetricsCollector

logger = logging.getLogger(__name__)

REPORT_SIZE = len(PREDICATE_CATALOG) + len(LATENCY_CATALOG)


def _latency_average(
    cluster: ClusterView,
    configs: tuple[MapConfig, ...],
    metric: LatencyMetric,
    settings: CollectorSettings,
) -> int:
    return aggregate_latency(
        configs,
        metric.predicate,
        cluster.get_local_map_stats,
        metric.latency_of,
        metric.count_of,
        isolate_failures=settings.isolate_stats_failures,
    )


def collect_map_metrics(cluster: ClusterView, settings: Optional[CollectorSettings] = None) -> dict[str, str]:
    """Run one collection cycle over the maps of ``cluster``.

    The configuration index is built once and shared read-only by the trait
    counts and the four latency averages. Every catalog key is present in the
    returned report exactly once.

    Raises:
        MetricsCollectionError: When the cluster cannot be enumerated or
            becomes unavailable during the cycle, or when a statistics lookup
            fails and failure isolation is turned off.
    """
    settings = settings or CollectorSettings()
    style = settings.key_style

    try:
        configs = build_config_index(cluster, settings.map_service_name)
    except ClusterAccessError as exc:
        raise MetricsCollectionError(f"Failed to enumerate maps: {exc}", collector="map_info") from exc

    report: dict[str, str] = {}
    for predicate in PREDICATE_CATALOG:
        report[predicate.report_key(style)] = str(count_matching(configs, predicate))

    try:
        if settings.parallel_aggregation:
            with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
                futures = [
                    (metric, executor.submit(_latency_average, cluster, configs, metric, settings))
                    for metric in LATENCY_CATALOG
                ]
                averages = [(metric, future.result()) for metric, future in futures]
        else:
            averages = [
                (metric, _latency_average(cluster, configs, metric, settings))
                for metric in LATENCY_CATALOG
            ]
    except ClusterAccessError as exc:
        raise MetricsCollectionError(f"Failed to aggregate map latency: {exc}", collector="map_info") from exc

    for metric, average in averages:
        report[metric.report_key(style)] = str(average)

    logger.debug("Collected map metrics for %s maps", len(configs))
    return report


class MapInfoCollector(BaseMetricsCollector):
    """Collect configuration trait counts and latency averages of distributed maps."""

    def __init__(
        self,
        name: str = "map_info",
        settings: Optional[CollectorSettings] = None,
    ):
        """Initialize the map collector from ``settings``."""
        self.settings = settings or CollectorSettings()
        super().__init__(
            name,
            self.settings.enabled,
            self.settings.collection_interval,
            self.settings.metrics_prefix,
        )
        self._units = {
            **{p.report_key(self.settings.key_style): (MetricUnit.COUNT, p.description) for p in PREDICATE_CATALOG},
            **{m.report_key(self.settings.key_style): (MetricUnit.MILLISECONDS, m.description) for m in LATENCY_CATALOG},
        }

        logger.debug("MapInfoCollector initialized")

    def compute_metrics(self, cluster: ClusterView) -> dict[str, str]:
        """Compute the flat map report for the current cycle."""
        return collect_map_metrics(cluster, self.settings)

    def describe(self, key: str) -> tuple[MetricType, Optional[MetricUnit], str]:
        unit, description = self._units.get(key, (None, f"{key} metric"))
        return MetricType.GAUGE, unit, description
