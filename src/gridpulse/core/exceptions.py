"""
Core Exceptions for gridpulse.

This module defines the exception classes used throughout the metrics
collection system. They separate failures of the live cluster calls from
failures of a whole collection cycle and from configuration problems, so
callers can decide what to isolate and what to surface.

The exceptions are organized into categories:
- Cluster Access Exceptions
- Collection Exceptions
- Configuration Exceptions

Each exception carries a descriptive message, an optional error code and
context to aid in troubleshooting.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class GridPulseError(Exception):
    """Base exception class for all gridpulse errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize a gridpulse error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

        logger.debug(f"GridPulseError: {message}", extra={
            "error_code": error_code,
            "context": context
        })


# Cluster Access Exceptions

class ClusterAccessError(GridPulseError):
    """Base exception for failed live calls against the cluster."""
    pass


class ResourceNotFoundError(ClusterAccessError):
    """Raised when a distributed object no longer exists (e.g. concurrently destroyed)."""

    def __init__(self, name: str, message: Optional[str] = None):
        """
        Initialize a resource not found error.

        Args:
            name: Name of the distributed object that was not found
            message: Optional custom message
        """
        self.name = name
        default_message = f"Distributed object '{name}' not found"
        super().__init__(
            message or default_message,
            error_code="RESOURCE_NOT_FOUND",
            context={"name": name}
        )


class StatsFetchError(ClusterAccessError):
    """Raised when the live statistics of a map cannot be fetched."""

    def __init__(self, name: str, message: Optional[str] = None, cause: Optional[Exception] = None):
        """
        Initialize a stats fetch error.

        Args:
            name: Name of the map whose statistics were requested
            message: Optional custom message
            cause: Optional underlying exception
        """
        self.name = name
        self.cause = cause

        default_message = f"Failed to fetch local statistics for map '{name}'"
        if cause:
            default_message += f": {str(cause)}"

        super().__init__(
            message or default_message,
            error_code="STATS_FETCH_FAILED",
            context={"name": name, "cause": str(cause) if cause else None}
        )


class ClusterUnavailableError(ClusterAccessError):
    """Raised when the cluster cannot be queried at all."""

    def __init__(self, message: Optional[str] = None, cause: Optional[Exception] = None):
        """
        Initialize a cluster unavailable error.

        Args:
            message: Optional custom message
            cause: Optional underlying exception
        """
        self.cause = cause
        default_message = "Cluster is unavailable"
        if cause:
            default_message += f": {str(cause)}"

        super().__init__(
            message or default_message,
            error_code="CLUSTER_UNAVAILABLE",
            context={"cause": str(cause) if cause else None}
        )


# Collection Exceptions

class MetricsCollectionError(GridPulseError):
    """Raised when a collection cycle cannot produce a complete report."""

    def __init__(self, message: str, collector: Optional[str] = None):
        """
        Initialize a metrics collection error.

        Args:
            message: Human-readable error message
            collector: Optional name of the collector that failed
        """
        self.collector = collector
        super().__init__(
            message,
            error_code="METRICS_COLLECTION_FAILED",
            context={"collector": collector} if collector else None
        )


# Configuration Exceptions

class ConfigurationError(GridPulseError):
    """Base exception for configuration errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, config_key: str, value: Any, reason: str, message: Optional[str] = None):
        """
        Initialize an invalid configuration error.

        Args:
            config_key: The configuration key with invalid value
            value: The invalid value
            reason: The reason the value is invalid
            message: Optional custom message
        """
        self.config_key = config_key
        self.value = value
        self.reason = reason

        default_message = f"Invalid configuration value for '{config_key}': {value} ({reason})"

        super().__init__(
            message or default_message,
            error_code="INVALID_CONFIGURATION",
            context={"config_key": config_key, "value": str(value), "reason": reason}
        )


# Utility Functions

def format_exception_context(exception: GridPulseError) -> str:
    """
    Format exception context for logging or display.

    Args:
        exception: The gridpulse exception

    Returns:
        Formatted string representation of the exception context
    """
    if not exception.context:
        return exception.message

    context_parts = [f"{key}={value}" for key, value in exception.context.items()]
    return f"{exception.message} [{', '.join(context_parts)}]"


def is_retriable_error(exception: Exception) -> bool:
    """
    Determine if an error is retriable on the next collection cycle.

    Args:
        exception: The exception to check

    Returns:
        True if the error is retriable, False otherwise
    """
    # Live-call failures usually clear up by the next cycle
    retriable_errors = [
        StatsFetchError,
        ClusterUnavailableError,
    ]

    non_retriable_errors = [
        ConfigurationError,
    ]

    if any(isinstance(exception, error_type) for error_type in non_retriable_errors):
        return False

    if any(isinstance(exception, error_type) for error_type in retriable_errors):
        return True

    # Default to not retriable for unknown errors
    return False
