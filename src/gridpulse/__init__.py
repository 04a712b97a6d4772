"""gridpulse: configuration and latency metrics for distributed maps."""

__version__ = "0.1.0"
