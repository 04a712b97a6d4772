"""Domain models shared across gridpulse."""

from .map import (
    AttributeConfig,
    DistributedObjectInfo,
    EvictionConfig,
    HotRestartConfig,
    IndexConfig,
    LocalMapStats,
    MapConfig,
    MapStoreConfig,
    QueryCacheConfig,
    WanReplicationRef,
)

__all__ = [
    "AttributeConfig",
    "DistributedObjectInfo",
    "EvictionConfig",
    "HotRestartConfig",
    "IndexConfig",
    "LocalMapStats",
    "MapConfig",
    "MapStoreConfig",
    "QueryCacheConfig",
    "WanReplicationRef",
]
