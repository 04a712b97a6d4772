"""Enumerations for gridpulse map configuration."""

from __future__ import annotations

import logging
from enum import Enum, unique

logger = logging.getLogger(__name__)

MAP_SERVICE_NAME = "hz:impl:mapService"


@unique
class EvictionPolicy(str, Enum):
    """
    Eviction policy configured for a map.

    Attributes:
        NONE: No eviction; entries stay until removed explicitly
        LRU: Least recently used entries are evicted first
        LFU: Least frequently used entries are evicted first
        RANDOM: Entries are evicted at random
    """
    NONE = "NONE"
    LRU = "LRU"
    LFU = "LFU"
    RANDOM = "RANDOM"

    @classmethod
    def from_string(cls, policy: str) -> EvictionPolicy:
        """Convert a case-insensitive string to an EvictionPolicy."""
        if isinstance(policy, EvictionPolicy):
            return policy
        if not isinstance(policy, str):
            raise ValueError("Eviction policy must be provided as a string")

        try:
            return cls(policy.strip().upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            logger.error("Invalid eviction policy: '%s'. Valid policies are: %s", policy, valid)
            raise ValueError(f"Invalid eviction policy: '{policy}'. Valid policies are: {valid}") from None


@unique
class InMemoryFormat(str, Enum):
    """
    Storage format used for map entries.

    Attributes:
        BINARY: Entries held in serialized form on the heap
        OBJECT: Entries held as deserialized objects
        NATIVE: Entries held in off-heap native memory
    """
    BINARY = "BINARY"
    OBJECT = "OBJECT"
    NATIVE = "NATIVE"

    @classmethod
    def from_string(cls, fmt: str) -> InMemoryFormat:
        """Convert a case-insensitive string to an InMemoryFormat."""
        if isinstance(fmt, InMemoryFormat):
            return fmt
        if not isinstance(fmt, str):
            raise ValueError("In-memory format must be provided as a string")

        try:
            return cls(fmt.strip().upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            logger.error("Invalid in-memory format: '%s'. Valid formats are: %s", fmt, valid)
            raise ValueError(f"Invalid in-memory format: '{fmt}'. Valid formats are: {valid}") from None


class KeyStyle(str, Enum):
    """Naming scheme used for report keys."""
    DESCRIPTIVE = "descriptive"
    COMPACT = "compact"
