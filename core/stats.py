"""Process-wide translation statistics.

A StatsAggregator is created once per server and handed to the request handlers; it is not a
module-level global.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from models.stats_models import Stats
from utils.logger_utils import LoggerUtils
from utils.rwlock import AsyncRWLock

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["StatsAggregator"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class StatsAggregator:
    """Sum of the Stats of every completed greeting request."""

    def __init__(self) -> None:
        self._total: Stats = Stats()
        self._requests: int = 0
        self._lock: AsyncRWLock = AsyncRWLock()

    async def merge(self, stats: Stats) -> None:
        """Add one request's Stats to the total."""
        async with self._lock.write():
            self._total.merge(stats)
            self._requests += 1

    async def snapshot(self) -> Stats:
        """Return a copy of the current total."""
        async with self._lock.read():
            return self._total.copy()

    async def request_count(self) -> int:
        """Number of requests merged so far."""
        async with self._lock.read():
            return self._requests
