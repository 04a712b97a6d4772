"""Calling conventions recognised by the query planner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Convention:
    """Trait marking the implementation family of a relational node.

    Conventions carry no behaviour of their own; rules dispatch on them by
    identity.
    """

    name: str
    rel_class_name: str

    def can_convert_convention(self, to_convention: Convention) -> bool:
        return True

    def use_abstract_converters_for_conversion(self, from_traits: Any, to_traits: Any) -> bool:
        return True

    def __str__(self) -> str:
        return self.name


PHYSICAL = Convention("PHYSICAL", "PhysicalRel")
