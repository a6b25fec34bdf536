"""Exceptions raised by the greeting core.

Only ConfigurationError and TranslationError reach callers of the engine. DeserializationError and
PersistenceError are raised by the translation cache and absorbed by its users with a warning.
"""

from __future__ import annotations

__all__: list[str] = [
    "ConfigurationError",
    "DeserializationError",
    "GreeterError",
    "PersistenceError",
    "TranslationError",
]


class GreeterError(Exception):
    """Base class for errors raised by the greeting core."""


class ConfigurationError(GreeterError):
    """Required settings (project ID, credentials, engine) are missing or invalid."""


class DeserializationError(GreeterError):
    """A cache snapshot could not be parsed into a translation mapping."""


class PersistenceError(GreeterError):
    """A cache snapshot could not be written to disk."""


class TranslationError(GreeterError):
    """The translation provider failed or returned no translation."""
