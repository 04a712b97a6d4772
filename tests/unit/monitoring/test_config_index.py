"""Tests for building the per-cycle configuration index."""

from __future__ import annotations

import pytest

from gridpulse.cluster import InMemoryCluster
from gridpulse.cluster.interfaces import ClusterView
from gridpulse.core.exceptions import ClusterUnavailableError, ResourceNotFoundError
from gridpulse.core.models import DistributedObjectInfo, LocalMapStats, MapConfig
from gridpulse.monitoring.metrics.config_index import build_config_index


class RacingCluster(ClusterView):
    """Cluster whose maps vanish between enumeration and resolution."""

    def __init__(self, live: dict[str, MapConfig], vanished: set[str]) -> None:
        self.live = live
        self.vanished = vanished

    def distributed_objects(self):
        names = list(self.live) + sorted(self.vanished)
        return [DistributedObjectInfo(name=name) for name in names]

    def get_map_config(self, name: str):
        if name in self.vanished:
            raise ResourceNotFoundError(name)
        return self.live[name]

    def get_local_map_stats(self, name: str) -> LocalMapStats:
        return LocalMapStats()


def test_only_map_service_objects_are_indexed(three_map_cluster: InMemoryCluster) -> None:
    three_map_cluster.add_object("jobs", "hz:impl:queueService")

    index = build_config_index(three_map_cluster)

    assert sorted(config.name for config in index) == ["r1", "r2", "r3"]


def test_index_is_an_immutable_snapshot(three_map_cluster: InMemoryCluster) -> None:
    index = build_config_index(three_map_cluster)
    three_map_cluster.add_map(MapConfig(name="late"))

    assert isinstance(index, tuple)
    assert "late" not in {config.name for config in index}


def test_concurrently_destroyed_maps_are_dropped() -> None:
    cluster = RacingCluster({"kept": MapConfig(name="kept")}, {"gone"})

    index = build_config_index(cluster)

    assert [config.name for config in index] == ["kept"]


def test_unresolvable_config_is_dropped(three_map_cluster: InMemoryCluster) -> None:
    three_map_cluster.forget_config("r2")

    index = build_config_index(three_map_cluster)

    assert sorted(config.name for config in index) == ["r1", "r3"]


def test_custom_service_name() -> None:
    cluster = InMemoryCluster(map_service_name="maps")
    cluster.add_map(MapConfig(name="m"))

    assert build_config_index(cluster, "maps")[0].name == "m"
    assert build_config_index(cluster) == ()


def test_enumeration_failure_propagates(three_map_cluster: InMemoryCluster) -> None:
    three_map_cluster.fail_enumeration(ClusterUnavailableError("down"))

    with pytest.raises(ClusterUnavailableError):
        build_config_index(three_map_cluster)


def test_unavailable_cluster_during_resolution_propagates() -> None:
    class DisconnectedCluster(RacingCluster):
        def get_map_config(self, name: str):
            raise ClusterUnavailableError("connection lost")

    cluster = DisconnectedCluster({"a": MapConfig(name="a")}, set())

    with pytest.raises(ClusterUnavailableError):
        build_config_index(cluster)
