"""
In-Memory Cluster View

This module provides an in-process implementation of the ClusterView
interface. It holds map configurations, live statistics and other
distributed objects in dictionaries, and can be told to fail individual
lookups so that failure isolation can be exercised without a real cluster.
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional

from gridpulse.cluster.interfaces import ClusterView
from gridpulse.core.enums import MAP_SERVICE_NAME
from gridpulse.core.exceptions import (
    ClusterAccessError,
    ConfigurationError,
    ResourceNotFoundError,
    StatsFetchError,
)
from gridpulse.core.models import DistributedObjectInfo, LocalMapStats, MapConfig

logger = logging.getLogger(__name__)


class InMemoryCluster(ClusterView):
    """
    In-memory implementation of the cluster view interface.

    Features:
    - Registration of maps with configuration and statistics
    - Registration of non-map distributed objects
    - Injected failures for statistics lookups and enumeration
    """

    def __init__(self, map_service_name: str = MAP_SERVICE_NAME):
        """
        Initialize an empty cluster.

        Args:
            map_service_name: Service name reported for registered maps
        """
        self.map_service_name = map_service_name
        self._objects: Dict[str, str] = {}
        self._configs: Dict[str, MapConfig] = {}
        self._stats: Dict[str, LocalMapStats] = {}
        self._stats_failures: Dict[str, ClusterAccessError] = {}
        self._enumeration_failure: Optional[ClusterAccessError] = None
        self._lock = threading.RLock()

        logger.debug("Initialized InMemoryCluster")

    def add_map(self, config: MapConfig, stats: Optional[LocalMapStats] = None) -> None:
        """
        Register a map, replacing any existing map of the same name.

        Args:
            config: Configuration of the map
            stats: Live statistics; defaults to all-zero counters
        """
        with self._lock:
            self._objects[config.name] = self.map_service_name
            self._configs[config.name] = config
            self._stats[config.name] = stats or LocalMapStats()
            self._stats_failures.pop(config.name, None)
        logger.debug("Registered map '%s'", config.name)

    def add_object(self, name: str, service_name: str) -> None:
        """Register a distributed object that only takes part in enumeration."""
        with self._lock:
            self._objects[name] = service_name
        logger.debug("Registered object '%s' for service '%s'", name, service_name)

    def remove(self, name: str) -> None:
        """Destroy the distributed object ``name`` if it exists."""
        with self._lock:
            self._objects.pop(name, None)
            self._configs.pop(name, None)
            self._stats.pop(name, None)
            self._stats_failures.pop(name, None)
        logger.debug("Removed object '%s'", name)

    def forget_config(self, name: str) -> None:
        """Drop the configuration of ``name`` while keeping it enumerable."""
        with self._lock:
            self._configs.pop(name, None)

    def update_stats(self, name: str, stats: LocalMapStats) -> None:
        """Replace the live statistics of an existing map."""
        with self._lock:
            if name not in self._configs:
                raise ResourceNotFoundError(name)
            self._stats[name] = stats

    def fail_stats(self, name: str, error: Optional[ClusterAccessError] = None) -> None:
        """Make every statistics lookup for ``name`` raise ``error``."""
        with self._lock:
            self._stats_failures[name] = error or StatsFetchError(name, "Injected statistics failure")

    def fail_enumeration(self, error: Optional[ClusterAccessError] = None) -> None:
        """Make enumeration raise ``error``; pass None to restore it."""
        with self._lock:
            self._enumeration_failure = error

    def distributed_objects(self) -> List[DistributedObjectInfo]:
        with self._lock:
            if self._enumeration_failure is not None:
                raise self._enumeration_failure
            return [
                DistributedObjectInfo(name=name, service_name=service_name)
                for name, service_name in self._objects.items()
            ]

    def get_map_config(self, name: str) -> Optional[MapConfig]:
        with self._lock:
            if name not in self._objects:
                raise ResourceNotFoundError(name)
            return self._configs.get(name)

    def get_local_map_stats(self, name: str) -> LocalMapStats:
        with self._lock:
            failure = self._stats_failures.get(name)
            if failure is not None:
                raise failure
            try:
                return self._stats[name]
            except KeyError:
                raise StatsFetchError(name, f"Map '{name}' has no local statistics") from None

    @classmethod
    def from_snapshot(cls, data: Mapping[str, Any], map_service_name: str = MAP_SERVICE_NAME) -> "InMemoryCluster":
        """
        Build a cluster from a snapshot mapping.

        The snapshot has the shape::

            maps:
              - config: {name: orders, map_store: {enabled: true}}
                stats: {total_get_latency: 100, get_operation_count: 10}
            objects:
              - {name: jobs, service_name: hz:impl:queueService}

        Args:
            data: Parsed snapshot document
            map_service_name: Service name reported for the maps

        Returns:
            A populated InMemoryCluster

        Raises:
            ConfigurationError: If the snapshot is malformed
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Cluster snapshot must be a mapping")

        cluster = cls(map_service_name=map_service_name)
        try:
            for entry in data.get("maps") or []:
                config = MapConfig.model_validate(entry["config"])
                stats = LocalMapStats.model_validate(entry.get("stats") or {})
                cluster.add_map(config, stats)

            for entry in data.get("objects") or []:
                cluster.add_object(entry["name"], entry["service_name"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Malformed cluster snapshot: {exc}") from exc

        logger.info("Loaded cluster snapshot with %s objects", len(cluster._objects))
        return cluster
