"""Greeting core for the greeter.

This package contains the greeting engine, the translation cache, usage statistics, the
translation provider interface and the shared data that ties them together.
"""

from core.errors import (
    ConfigurationError,
    DeserializationError,
    GreeterError,
    PersistenceError,
    TranslationError,
)
from core.greeter import GreetingEngine, compose_greeting
from core.shared_data import SharedData
from core.version import VERSION

__all__: list[str] = [
    "VERSION",
    "ConfigurationError",
    "DeserializationError",
    "GreeterError",
    "GreetingEngine",
    "PersistenceError",
    "SharedData",
    "TranslationError",
    "compose_greeting",
]
