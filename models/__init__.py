"""Data models for the greeter.

This package contains dataclass definitions for configuration, greeting requests and responses,
and translation usage statistics.
"""

from __future__ import annotations

from models.config_models import Config
from models.greeting_models import GreetingRequest, GreetingResponse
from models.stats_models import UNIT_COST, Stats

__all__: list[str] = [
    "UNIT_COST",
    "Config",
    "GreetingRequest",
    "GreetingResponse",
    "Stats",
]
