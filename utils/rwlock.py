"""Reader/writer lock for asyncio tasks.

Any number of readers may hold the lock together. A writer holds it alone. Once a writer is
waiting, new readers queue behind it so a steady stream of lookups cannot starve an insert.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import AsyncIterator

__all__: list[str] = ["AsyncRWLock"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class AsyncRWLock:
    """Shared/exclusive lock built on asyncio.Condition.

    Use ``async with lock.read():`` for shared access and ``async with lock.write():`` for
    exclusive access. The lock is not reentrant; a task holding the read side must not ask
    for the write side.
    """

    def __init__(self) -> None:
        self._cond: asyncio.Condition = asyncio.Condition()
        self._readers: int = 0
        self._writer: bool = False
        self._waiting_writers: int = 0

    @property
    def readers(self) -> int:
        """Number of tasks currently holding the read side."""
        return self._readers

    @property
    def writer_active(self) -> bool:
        """Whether a task currently holds the write side."""
        return self._writer

    async def acquire_read(self) -> None:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._waiting_writers == 0)
            self._readers += 1

    async def release_read(self) -> None:
        async with self._cond:
            if self._readers <= 0:
                msg = "release_read() called without a matching acquire_read()"
                raise RuntimeError(msg)
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    async def acquire_write(self) -> None:
        async with self._cond:
            self._waiting_writers += 1
            acquired: bool = False
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
                self._writer = True
                acquired = True
            finally:
                self._waiting_writers -= 1
                if not acquired:
                    # readers parked behind this writer must re-check
                    self._cond.notify_all()

    async def release_write(self) -> None:
        async with self._cond:
            if not self._writer:
                msg = "release_write() called without a matching acquire_write()"
                raise RuntimeError(msg)
            self._writer = False
            self._cond.notify_all()

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        """Hold the shared side for the duration of the block."""
        await self.acquire_read()
        try:
            yield
        finally:
            # a cancellation arriving here must not leave the reader counted
            await asyncio.shield(self.release_read())

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Hold the exclusive side for the duration of the block."""
        await self.acquire_write()
        try:
            yield
        finally:
            await asyncio.shield(self.release_write())

    def __repr__(self) -> str:
        return (
            f"AsyncRWLock(readers={self._readers}, writer={self._writer}, "
            f"waiting_writers={self._waiting_writers})"
        )
