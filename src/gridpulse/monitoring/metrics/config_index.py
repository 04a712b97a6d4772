"""Per-cycle snapshot of the configuration of every live map."""

from __future__ import annotations

import logging
from typing import Tuple

from gridpulse.cluster.interfaces import ClusterView
from gridpulse.core.enums import MAP_SERVICE_NAME
from gridpulse.core.exceptions import ResourceNotFoundError
from gridpulse.core.models import MapConfig

logger = logging.getLogger(__name__)


def build_config_index(cluster: ClusterView, service_name: str = MAP_SERVICE_NAME) -> Tuple[MapConfig, ...]:
    """Resolve the configuration of every map registered in ``cluster``.

    Objects of other services are ignored. A map whose configuration resolves
    to ``None`` or whose lookup raises :class:`ResourceNotFoundError` (it was
    destroyed concurrently) is left out of the index. Enumeration failures
    and :class:`ClusterUnavailableError` propagate so that an unreachable
    cluster never yields an empty index.

    The result is an immutable snapshot; its order carries no meaning.
    """
    configs = []
    skipped = 0

    for info in cluster.distributed_objects():
        if info.service_name != service_name:
            continue

        try:
            config = cluster.get_map_config(info.name)
        except ResourceNotFoundError as exc:
            logger.debug("Skipping map '%s': %s", info.name, exc)
            skipped += 1
            continue

        if config is None:
            logger.debug("Skipping map '%s': no configuration", info.name)
            skipped += 1
            continue

        configs.append(config)

    logger.debug("Built config index with %s maps (%s skipped)", len(configs), skipped)
    return tuple(configs)
