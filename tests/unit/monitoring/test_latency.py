"""Tests for latency accumulation and averaging."""

from __future__ import annotations

import logging

import pytest

from gridpulse.core.exceptions import ClusterUnavailableError, StatsFetchError
from gridpulse.core.models import LocalMapStats, MapConfig
from gridpulse.monitoring.metrics.latency import (
    LATENCY_CATALOG,
    NO_DATA,
    LatencyInfo,
    aggregate_latency,
)
from gridpulse.monitoring.metrics.predicates import is_map_store_enabled, negate


def _get_latency(stats: LocalMapStats) -> int:
    return stats.total_get_latency


def _get_count(stats: LocalMapStats) -> int:
    return stats.get_operation_count


@pytest.mark.parametrize(
    ("total", "count", "expected"),
    [
        (150, 15, 10),
        (7, 2, 3),
        (99, 100, 0),
        (0, 5, 0),
        (0, 0, NO_DATA),
        (42, 0, NO_DATA),
    ],
)
def test_average_truncates_and_uses_sentinel(total: int, count: int, expected: int) -> None:
    info = LatencyInfo()
    info.add(total, count)

    assert info.calculate_average() == expected


def test_zero_latency_with_operations_is_a_real_average() -> None:
    info = LatencyInfo(0, 3)

    assert info.calculate_average() == 0
    assert info.calculate_average() != NO_DATA


def test_accumulator_sums_samples() -> None:
    info = LatencyInfo()
    info.add(100, 10)
    info.add(50, 5)

    assert (info.total_latency, info.operation_count) == (150, 15)
    assert info.calculate_average() == 10


def test_accumulator_rejects_negative_samples() -> None:
    info = LatencyInfo()

    with pytest.raises(ValueError):
        info.add(-1, 1)
    with pytest.raises(ValueError):
        LatencyInfo(0, -1)

    assert (info.total_latency, info.operation_count) == (0, 0)


def test_aggregate_only_fetches_matching_maps() -> None:
    configs = (
        MapConfig(name="stored", map_store={"enabled": True}),
        MapConfig(name="plain"),
    )
    stats = {
        "stored": LocalMapStats(total_get_latency=20, get_operation_count=4),
        "plain": LocalMapStats(total_get_latency=90, get_operation_count=3),
    }
    fetched = []

    def fetch(name: str) -> LocalMapStats:
        fetched.append(name)
        return stats[name]

    average = aggregate_latency(configs, is_map_store_enabled, fetch, _get_latency, _get_count)

    assert average == 5
    assert fetched == ["stored"]


def test_aggregate_over_empty_subset_returns_sentinel() -> None:
    configs = (MapConfig(name="plain"),)

    def fetch(name: str) -> LocalMapStats:
        raise AssertionError("no map should be fetched")

    assert aggregate_latency(configs, is_map_store_enabled, fetch, _get_latency, _get_count) == NO_DATA


def test_partitions_are_computed_independently() -> None:
    configs = (
        MapConfig(name="a", map_store={"enabled": True}),
        MapConfig(name="b"),
        MapConfig(name="c"),
    )
    stats = {
        "a": LocalMapStats(total_get_latency=10, get_operation_count=1),
        "b": LocalMapStats(total_get_latency=30, get_operation_count=2),
        "c": LocalMapStats(total_get_latency=5, get_operation_count=1),
    }

    stored = aggregate_latency(configs, is_map_store_enabled, stats.__getitem__, _get_latency, _get_count)
    plain = aggregate_latency(configs, negate(is_map_store_enabled), stats.__getitem__, _get_latency, _get_count)

    assert stored == 10
    assert plain == 35 // 3


def test_failed_fetch_is_skipped_when_isolated(caplog: pytest.LogCaptureFixture) -> None:
    configs = (
        MapConfig(name="ok", map_store={"enabled": True}),
        MapConfig(name="broken", map_store={"enabled": True}),
    )

    def fetch(name: str) -> LocalMapStats:
        if name == "broken":
            raise StatsFetchError(name)
        return LocalMapStats(total_get_latency=12, get_operation_count=3)

    with caplog.at_level(logging.WARNING, logger="gridpulse.monitoring.metrics.latency"):
        average = aggregate_latency(configs, is_map_store_enabled, fetch, _get_latency, _get_count)

    assert average == 4
    assert "broken" in caplog.text


def test_failed_fetch_propagates_when_not_isolated() -> None:
    configs = (MapConfig(name="broken", map_store={"enabled": True}),)

    def fetch(name: str) -> LocalMapStats:
        raise StatsFetchError(name)

    with pytest.raises(StatsFetchError):
        aggregate_latency(
            configs,
            is_map_store_enabled,
            fetch,
            _get_latency,
            _get_count,
            isolate_failures=False,
        )


def test_unavailable_cluster_is_never_isolated() -> None:
    configs = (MapConfig(name="a"), MapConfig(name="b"))

    def fetch(name: str) -> LocalMapStats:
        raise ClusterUnavailableError("connection lost")

    with pytest.raises(ClusterUnavailableError):
        aggregate_latency(configs, negate(is_map_store_enabled), fetch, _get_latency, _get_count)


def test_latency_catalog_covers_both_operations_and_partitions() -> None:
    keys = [metric.key for metric in LATENCY_CATALOG]

    assert keys == [
        "put-latency-average-store-backed",
        "put-latency-average-not-store-backed",
        "get-latency-average-store-backed",
        "get-latency-average-not-store-backed",
    ]

    stored = MapConfig(name="s", map_store={"enabled": True})
    plain = MapConfig(name="p")
    for metric in LATENCY_CATALOG:
        # exactly one partition of each pair accepts a given map
        assert metric.predicate(stored) != metric.predicate(plain)
