"""Immutable map configuration and statistics models."""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gridpulse.core.enums import MAP_SERVICE_NAME, EvictionPolicy, InMemoryFormat


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class MapStoreConfig(_FrozenModel):
    """External store integration for a map."""

    enabled: bool = False
    class_name: Optional[str] = None


class HotRestartConfig(_FrozenModel):
    """Durability of map data across restarts."""

    enabled: bool = False
    fsync: bool = False


class EvictionConfig(_FrozenModel):
    """Eviction settings of a map."""

    policy: EvictionPolicy = EvictionPolicy.NONE
    size: int = Field(default=10_000, ge=0)

    @field_validator("policy", mode="before")
    @classmethod
    def _parse_policy(cls, value):
        return EvictionPolicy.from_string(value)


class IndexConfig(_FrozenModel):
    """Secondary index over one or more entry attributes."""

    attributes: Tuple[str, ...] = Field(..., min_length=1)
    name: Optional[str] = None
    type: str = "SORTED"


class AttributeConfig(_FrozenModel):
    """Derived attribute extracted from entries."""

    name: str
    extractor_class_name: str


class QueryCacheConfig(_FrozenModel):
    """Continuously updated view over a predicate on the map."""

    name: str
    predicate: Optional[str] = None
    include_value: bool = True


class WanReplicationRef(_FrozenModel):
    """Reference to a cross-cluster replication scheme."""

    name: str
    merge_policy: Optional[str] = None


class MapConfig(_FrozenModel):
    """Configuration snapshot of a single distributed map.

    Identity is the map ``name``. Instances are resolved fresh for every
    collection cycle and never mutated.
    """

    name: str = Field(..., min_length=1)
    read_backup_data: bool = False
    map_store: MapStoreConfig = Field(default_factory=MapStoreConfig)
    indexes: Tuple[IndexConfig, ...] = ()
    eviction: EvictionConfig = Field(default_factory=EvictionConfig)
    in_memory_format: InMemoryFormat = InMemoryFormat.BINARY
    hot_restart: HotRestartConfig = Field(default_factory=HotRestartConfig)
    wan_replication_ref: Optional[WanReplicationRef] = None
    attributes: Tuple[AttributeConfig, ...] = ()
    query_caches: Tuple[QueryCacheConfig, ...] = ()

    @field_validator("in_memory_format", mode="before")
    @classmethod
    def _parse_format(cls, value):
        return InMemoryFormat.from_string(value)


class LocalMapStats(_FrozenModel):
    """Live operation counters of a map on the local member.

    Latency totals are in milliseconds.
    """

    total_get_latency: int = Field(default=0, ge=0)
    get_operation_count: int = Field(default=0, ge=0)
    total_put_latency: int = Field(default=0, ge=0)
    put_operation_count: int = Field(default=0, ge=0)


class DistributedObjectInfo(_FrozenModel):
    """Identity of a distributed object as reported by enumeration."""

    name: str
    service_name: str = MAP_SERVICE_NAME
