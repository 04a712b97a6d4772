"""
Collector settings.

Purpose:
    Provide a validated settings object for the map metrics collector so the
    collector and the CLI depend on typed values instead of loose dictionaries.
External Dependencies:
    ``pydantic`` for validation and ``PyYAML`` for reading YAML files.
Fallback Semantics:
    When no settings file is given and ``GRIDPULSE_CONFIG_PATH`` is unset, the
    defaults of :class:`CollectorSettings` are used. Environment variables of
    the form ``GRIDPULSE_<FIELD>`` override values read from the file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gridpulse.core.enums import MAP_SERVICE_NAME, KeyStyle
from gridpulse.core.exceptions import ConfigurationError, InvalidConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "GRIDPULSE_"
CONFIG_PATH_ENV = "GRIDPULSE_CONFIG_PATH"


class CollectorSettings(BaseModel):
    """Tunable values of the map metrics collector."""

    enabled: bool = True
    collection_interval: float = Field(default=60.0, gt=0)
    metrics_prefix: str = Field(default="gridpulse", min_length=1)
    map_service_name: str = Field(default=MAP_SERVICE_NAME, min_length=1)
    key_style: KeyStyle = KeyStyle.DESCRIPTIVE
    isolate_stats_failures: bool = True
    parallel_aggregation: bool = False
    max_workers: int = Field(default=4, ge=1)

    model_config = ConfigDict(frozen=True, extra="forbid")


def _read_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported configuration format: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to parse configuration file: {str(e)}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid configuration format in {path}")

    section = data.get("collector", {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"'collector' section in {path} must be a mapping")

    logger.debug("Loaded configuration from %s", path)
    return dict(section)


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    overrides = {}
    for field_name in CollectorSettings.model_fields:
        value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value is not None:
            overrides[field_name] = value
    return overrides


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CollectorSettings:
    """
    Load collector settings from a file and the environment.

    Args:
        path: Optional YAML or JSON file; falls back to ``GRIDPULSE_CONFIG_PATH``
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Validated collector settings

    Raises:
        ConfigurationError: If the file cannot be found or parsed
        InvalidConfigurationError: If a value fails validation
    """
    environ = os.environ if environ is None else environ
    config_path = path or environ.get(CONFIG_PATH_ENV)

    values: Dict[str, Any] = {}
    if config_path:
        values.update(_read_file(Path(config_path)))
    else:
        logger.debug("No configuration file specified, using defaults")

    values.update(_env_overrides(environ))

    try:
        settings = CollectorSettings.model_validate(values)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"]) or "collector"
        raise InvalidConfigurationError(key, first.get("input"), first["msg"]) from e

    logger.debug("Collector settings resolved: %s", settings.model_dump())
    return settings
