"""Read-only access to the live cluster."""

from .in_memory import InMemoryCluster
from .interfaces import ClusterView
from .snapshot import load_snapshot

__all__ = ["ClusterView", "InMemoryCluster", "load_snapshot"]
