"""Query planner markers."""

from .conventions import PHYSICAL, Convention

__all__ = ["Convention", "PHYSICAL"]
