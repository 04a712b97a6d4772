"""Typed metric models produced by collectors."""

from __future__ import annotations

import time
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class MetricType(str, Enum):
    """Categorisation of supported metric families."""

    GAUGE = "gauge"


class MetricUnit(str, Enum):
    """Units attached to metric values."""

    COUNT = "count"
    MILLISECONDS = "milliseconds"


class MetricLabel(BaseModel):
    """A single ``name=value`` label."""

    name: str
    value: str

    model_config = ConfigDict(frozen=True)


class MetricValue(BaseModel):
    """Wrapper around a scalar metric value."""

    value: Union[int, float, str, bool]

    model_config = ConfigDict(frozen=True)


class Metric(BaseModel):
    """A named, typed metric sample."""

    name: str
    value: MetricValue
    type: MetricType
    unit: Optional[MetricUnit] = None
    labels: List[MetricLabel] = Field(default_factory=list)
    description: str = ""
    timestamp: float = Field(default_factory=time.time)

    model_config = ConfigDict(frozen=True)
