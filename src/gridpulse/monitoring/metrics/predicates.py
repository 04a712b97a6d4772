"""Catalog of configuration traits counted for every map."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

from gridpulse.core.enums import EvictionPolicy, InMemoryFormat, KeyStyle
from gridpulse.core.models import MapConfig

Predicate = Callable[[MapConfig], bool]


@dataclass(frozen=True)
class MapPredicate:
    """A named boolean test over a map configuration."""

    key: str
    compact_key: str
    description: str
    test: Predicate

    def __call__(self, config: MapConfig) -> bool:
        return self.test(config)

    def report_key(self, style: KeyStyle = KeyStyle.DESCRIPTIVE) -> str:
        return self.compact_key if style == KeyStyle.COMPACT else self.key


def is_map_store_enabled(config: MapConfig) -> bool:
    return config.map_store.enabled


def negate(predicate: Predicate) -> Predicate:
    """Return the logical complement of ``predicate``."""

    def negated(config: MapConfig) -> bool:
        return not predicate(config)

    return negated


def count_matching(configs: Iterable[MapConfig], predicate: Predicate) -> int:
    """Count the configurations for which ``predicate`` holds."""
    return sum(1 for config in configs if predicate(config))


PREDICATE_CATALOG: Tuple[MapPredicate, ...] = (
    MapPredicate(
        "backup-read-enabled-count",
        "mpbrct",
        "Maps that serve reads from backup replicas",
        lambda config: config.read_backup_data,
    ),
    MapPredicate(
        "store-backed-count",
        "mpmsct",
        "Maps backed by an external map store",
        is_map_store_enabled,
    ),
    MapPredicate(
        "query-view-count",
        "mpaoqcct",
        "Maps with at least one query cache",
        lambda config: len(config.query_caches) > 0,
    ),
    MapPredicate(
        "indexed-count",
        "mpaoict",
        "Maps with at least one secondary index",
        lambda config: len(config.indexes) > 0,
    ),
    MapPredicate(
        "durable-restart-count",
        "mphect",
        "Maps with hot restart persistence enabled",
        lambda config: config.hot_restart.enabled,
    ),
    MapPredicate(
        "replicated-count",
        "mpwact",
        "Maps with a WAN replication reference",
        lambda config: config.wan_replication_ref is not None,
    ),
    MapPredicate(
        "attributed-count",
        "mpaocct",
        "Maps with at least one custom attribute",
        lambda config: len(config.attributes) > 0,
    ),
    MapPredicate(
        "eviction-enabled-count",
        "mpevct",
        "Maps using an eviction policy",
        lambda config: config.eviction.policy != EvictionPolicy.NONE,
    ),
    MapPredicate(
        "native-memory-count",
        "mpnmct",
        "Maps storing entries in native memory",
        lambda config: config.in_memory_format == InMemoryFormat.NATIVE,
    ),
)
