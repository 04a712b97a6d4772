"""Tests for the collector registry."""

from __future__ import annotations

import pytest

from gridpulse.cluster import InMemoryCluster
from gridpulse.config import CollectorSettings
from gridpulse.core.enums import KeyStyle
from gridpulse.core.exceptions import ClusterUnavailableError, MetricsCollectionError
from gridpulse.monitoring.metrics import BaseMetricsCollector, MapInfoCollector, MetricsCollectorRegistry


class StaticCollector(BaseMetricsCollector):
    def __init__(self, name: str, report: dict[str, str]) -> None:
        super().__init__(name)
        self.report = report

    def compute_metrics(self, cluster) -> dict[str, str]:
        return dict(self.report)


class FailingCollector(BaseMetricsCollector):
    def compute_metrics(self, cluster) -> dict[str, str]:
        raise MetricsCollectionError("boom", collector=self.name)


@pytest.fixture()
def registry() -> MetricsCollectorRegistry:
    return MetricsCollectorRegistry()


def test_register_and_lookup(registry: MetricsCollectorRegistry) -> None:
    collector = MapInfoCollector()
    registry.register(collector)

    assert registry.get_collector("map_info") is collector
    assert registry.get_collector_names() == ["map_info"]

    with pytest.raises(ValueError):
        registry.register(MapInfoCollector())

    registry.unregister("map_info")
    with pytest.raises(ValueError):
        registry.get_collector("map_info")
    with pytest.raises(ValueError):
        registry.unregister("map_info")


def test_collect_all_merges_reports(registry: MetricsCollectorRegistry, three_map_cluster: InMemoryCluster) -> None:
    registry.register(MapInfoCollector())
    registry.register(StaticCollector("nodes", {"node-count": "3"}))

    report = registry.collect_all(three_map_cluster)

    assert report["node-count"] == "3"
    assert report["store-backed-count"] == "2"


def test_failed_collector_contributes_no_keys(
    registry: MetricsCollectorRegistry, three_map_cluster: InMemoryCluster
) -> None:
    registry.register(FailingCollector("broken"))
    registry.register(StaticCollector("nodes", {"node-count": "3"}))

    assert registry.collect_all(three_map_cluster) == {"node-count": "3"}


def test_unavailable_cluster_drops_whole_map_report(
    registry: MetricsCollectorRegistry, three_map_cluster: InMemoryCluster
) -> None:
    registry.register(MapInfoCollector())
    three_map_cluster.fail_enumeration(ClusterUnavailableError("down"))

    assert registry.collect_all(three_map_cluster) == {}


def test_duplicate_keys_are_rejected(registry: MetricsCollectorRegistry, empty_cluster: InMemoryCluster) -> None:
    registry.register(MapInfoCollector(settings=CollectorSettings(key_style=KeyStyle.COMPACT)))
    registry.register(StaticCollector("clash", {"mpbrct": "9"}))

    with pytest.raises(MetricsCollectionError):
        registry.collect_all(empty_cluster)


def test_disabled_collectors_are_skipped(registry: MetricsCollectorRegistry, empty_cluster: InMemoryCluster) -> None:
    registry.register(StaticCollector("nodes", {"node-count": "3"}))
    registry.disable_collector("nodes")

    assert registry.collect_all(empty_cluster) == {}

    registry.enable_collector("nodes")
    assert registry.collect_all(empty_cluster) == {"node-count": "3"}


def test_set_collection_interval(registry: MetricsCollectorRegistry) -> None:
    registry.register(MapInfoCollector())

    registry.set_collection_interval("map_info", 5.0)
    assert registry.get_collector("map_info").collection_interval == 5.0

    with pytest.raises(ValueError):
        registry.set_collection_interval("map_info", 0)


def test_collectors_not_yet_due_contribute_no_keys(
    registry: MetricsCollectorRegistry, empty_cluster: InMemoryCluster
) -> None:
    registry.register(StaticCollector("nodes", {"node-count": "3"}))
    registry.register(StaticCollector("members", {"member-count": "2"}))
    registry.set_collection_interval("nodes", 3600)
    registry.set_collection_interval("members", 3600)

    assert registry.collect_all(empty_cluster) == {"node-count": "3", "member-count": "2"}

    registry.get_collector("members").last_collection_time = 0.0
    assert registry.collect_all(empty_cluster) == {"member-count": "2"}


def test_failed_collector_is_retried_next_cycle(
    registry: MetricsCollectorRegistry, three_map_cluster: InMemoryCluster
) -> None:
    registry.register(MapInfoCollector())
    three_map_cluster.fail_enumeration(ClusterUnavailableError("down"))
    assert registry.collect_all(three_map_cluster) == {}

    three_map_cluster.fail_enumeration(None)
    assert registry.collect_all(three_map_cluster)["store-backed-count"] == "2"
