"""
Cluster View Interface

This module defines the abstract interface through which the metrics
collectors read the live cluster. It exposes exactly the three live calls a
collection cycle needs:

1. Enumerating the distributed objects registered in the cluster
2. Resolving a map name to its configuration
3. Fetching the live operation statistics of a map

All three are read-only. They are the only operations of a collection cycle
that may block or be slow.
"""

import abc
from typing import Iterable, Optional

from gridpulse.core.models import DistributedObjectInfo, LocalMapStats, MapConfig


class ClusterView(abc.ABC):
    """
    Abstract Base Class for a read-only view of a live cluster.

    Implementations wrap whatever client is used to talk to the cluster and
    translate its failures into ``ClusterAccessError`` subclasses.
    """

    @abc.abstractmethod
    def distributed_objects(self) -> Iterable[DistributedObjectInfo]:
        """
        Enumerate every distributed object currently registered.

        Returns:
            The identities and service names of all distributed objects

        Raises:
            ClusterUnavailableError: If the cluster cannot be queried
        """

    @abc.abstractmethod
    def get_map_config(self, name: str) -> Optional[MapConfig]:
        """
        Resolve a map name to its configuration.

        Args:
            name: Name of the map

        Returns:
            The map configuration, or None if it cannot be resolved

        Raises:
            ResourceNotFoundError: If the map was destroyed concurrently
        """

    @abc.abstractmethod
    def get_local_map_stats(self, name: str) -> LocalMapStats:
        """
        Fetch the live operation statistics of a map.

        Args:
            name: Name of the map

        Returns:
            A snapshot of the map's local statistics

        Raises:
            StatsFetchError: If the statistics cannot be fetched
        """
