"""Configuration data models for the greeter.

Each dataclass mirrors one section of ``greeter.ini``. Field names are the INI keys, and the
default value's type decides how the loader coerces the string read from the file.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = [
    "Cache",
    "Config",
    "General",
    "Server",
    "Translation",
]


@dataclass
class General:
    DEBUG: bool = False
    LOG_FILE: str = ""
    SCRIPT_NAME: str = ""


@dataclass
class Translation:
    ENGINE: str = "google_cloud"
    PROJECT_ID: str = ""
    CREDENTIALS: str = ""
    SOURCE_LANGUAGE: str = "en"


@dataclass
class Cache:
    FILE: str = "translation_cache.json"


@dataclass
class Server:
    HOST: str = "0.0.0.0"  # noqa: S104
    PORT: int = 8080
    STATIC_DIR: str = "frontend/dist"


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    TRANSLATION: Translation = field(default_factory=Translation)
    CACHE: Cache = field(default_factory=Cache)
    SERVER: Server = field(default_factory=Server)
