"""Global pytest configuration for gridpulse.

Ensures the ``src`` tree is importable regardless of how the repository is
cloned and provides the cluster fixtures shared across the unit tests.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path so imports work without installing
project_root = Path(__file__).parent.parent
src_dir = project_root / 'src'

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from gridpulse.cluster import InMemoryCluster  # noqa: E402
from gridpulse.core.models import LocalMapStats, MapConfig  # noqa: E402


@pytest.fixture()
def empty_cluster() -> InMemoryCluster:
    """Provide a cluster without any distributed objects."""
    return InMemoryCluster()


@pytest.fixture()
def three_map_cluster() -> InMemoryCluster:
    """Provide the R1/R2/R3 cluster used by the collector scenarios.

    R1 is store backed with backup reads, R2 has no store and no traffic,
    R3 is store backed.
    """
    cluster = InMemoryCluster()
    cluster.add_map(
        MapConfig(name="r1", read_backup_data=True, map_store={"enabled": True}),
        LocalMapStats(total_get_latency=100, get_operation_count=10, total_put_latency=30, put_operation_count=4),
    )
    cluster.add_map(
        MapConfig(name="r2"),
        LocalMapStats(total_get_latency=0, get_operation_count=0, total_put_latency=9, put_operation_count=2),
    )
    cluster.add_map(
        MapConfig(name="r3", map_store={"enabled": True}),
        LocalMapStats(total_get_latency=50, get_operation_count=5, total_put_latency=0, put_operation_count=0),
    )
    return cluster
