"""Configuration for gridpulse collectors."""

from .settings import CollectorSettings, load_settings

__all__ = ["CollectorSettings", "load_settings"]
