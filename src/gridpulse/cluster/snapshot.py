"""Load an InMemoryCluster from a YAML or JSON snapshot file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

import yaml

from gridpulse.cluster.in_memory import InMemoryCluster
from gridpulse.core.enums import MAP_SERVICE_NAME
from gridpulse.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def load_snapshot(path: Union[str, Path], map_service_name: str = MAP_SERVICE_NAME) -> InMemoryCluster:
    """
    Read a cluster snapshot document from disk.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file
        map_service_name: Service name reported for the maps

    Returns:
        The cluster described by the snapshot

    Raises:
        ConfigurationError: If the file is missing, unsupported or cannot be parsed
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        raise ConfigurationError(f"Snapshot file not found: {snapshot_path}")

    suffix = snapshot_path.suffix.lower()
    try:
        with open(snapshot_path, encoding="utf-8") as f:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported snapshot format: {snapshot_path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to parse snapshot file: {str(e)}") from e

    logger.debug("Loaded snapshot from %s", snapshot_path)
    return InMemoryCluster.from_snapshot(data or {}, map_service_name=map_service_name)
