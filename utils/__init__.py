"""Utility modules for the greeter.

This package provides logging setup, path and file helpers, and an asyncio reader/writer lock.
"""

from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils
from utils.rwlock import AsyncRWLock

__all__: list[str] = ["AsyncRWLock", "FileUtils", "LoggerUtils"]
