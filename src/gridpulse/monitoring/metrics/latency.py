"""Latency averaging over a predicate-selected subset of maps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

from gridpulse.core.enums import KeyStyle
from gridpulse.core.exceptions import ResourceNotFoundError, StatsFetchError
from gridpulse.core.models import LocalMapStats, MapConfig

from .predicates import Predicate, is_map_store_enabled, negate

logger = logging.getLogger(__name__)

NO_DATA = -1

StatsFetcher = Callable[[str], LocalMapStats]
StatsField = Callable[[LocalMapStats], int]


class LatencyInfo:
    """Running (total latency, operation count) pair."""

    def __init__(self, total_latency: int = 0, operation_count: int = 0) -> None:
        if total_latency < 0 or operation_count < 0:
            raise ValueError("Latency totals must be non-negative")
        self.total_latency = total_latency
        self.operation_count = operation_count

    def add(self, total_latency: int, operation_count: int) -> None:
        if total_latency < 0 or operation_count < 0:
            raise ValueError(
                f"Cannot add negative sample ({total_latency}, {operation_count})"
            )
        self.total_latency += total_latency
        self.operation_count += operation_count

    def calculate_average(self) -> int:
        """Return the truncated average, or ``NO_DATA`` when nothing was observed."""
        if self.operation_count == 0:
            return NO_DATA
        return self.total_latency // self.operation_count


def aggregate_latency(
    configs: Iterable[MapConfig],
    predicate: Predicate,
    stats_fetcher: StatsFetcher,
    latency_of: StatsField,
    count_of: StatsField,
    isolate_failures: bool = True,
) -> int:
    """Average a latency figure over every map matching ``predicate``.

    Statistics are fetched once per matching map. With ``isolate_failures``
    a map whose statistics cannot be fetched (:class:`StatsFetchError`) or
    that was destroyed since indexing (:class:`ResourceNotFoundError`) is
    skipped with a warning; otherwise the error propagates.
    :class:`ClusterUnavailableError` always propagates.
    """
    latency_info = LatencyInfo()

    for config in configs:
        if not predicate(config):
            continue

        try:
            stats = stats_fetcher(config.name)
        except (StatsFetchError, ResourceNotFoundError) as exc:
            if not isolate_failures:
                raise
            logger.warning("Skipping latency of map '%s': %s", config.name, exc)
            continue

        latency_info.add(latency_of(stats), count_of(stats))

    return latency_info.calculate_average()


@dataclass(frozen=True)
class LatencyMetric:
    """A latency average reported over one partition of the maps."""

    key: str
    compact_key: str
    description: str
    predicate: Predicate
    latency_of: StatsField
    count_of: StatsField

    def report_key(self, style: KeyStyle = KeyStyle.DESCRIPTIVE) -> str:
        return self.compact_key if style == KeyStyle.COMPACT else self.key


def _put_latency(stats: LocalMapStats) -> int:
    return stats.total_put_latency


def _put_count(stats: LocalMapStats) -> int:
    return stats.put_operation_count


def _get_latency(stats: LocalMapStats) -> int:
    return stats.total_get_latency


def _get_count(stats: LocalMapStats) -> int:
    return stats.get_operation_count


LATENCY_CATALOG: Tuple[LatencyMetric, ...] = (
    LatencyMetric(
        "put-latency-average-store-backed",
        "mpptlams",
        "Average put latency of maps backed by a map store",
        is_map_store_enabled,
        _put_latency,
        _put_count,
    ),
    LatencyMetric(
        "put-latency-average-not-store-backed",
        "mpptla",
        "Average put latency of maps without a map store",
        negate(is_map_store_enabled),
        _put_latency,
        _put_count,
    ),
    LatencyMetric(
        "get-latency-average-store-backed",
        "mpgtlams",
        "Average get latency of maps backed by a map store",
        is_map_store_enabled,
        _get_latency,
        _get_count,
    ),
    LatencyMetric(
        "get-latency-average-not-store-backed",
        "mpgtla",
        "Average get latency of maps without a map store",
        negate(is_map_store_enabled),
        _get_latency,
        _get_count,
    ),
)
