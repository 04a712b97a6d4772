"""Monitoring subsystems."""
