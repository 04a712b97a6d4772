"""Command line interface for gridpulse."""
