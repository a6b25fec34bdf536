"""Translation cache.

Holds translations in memory as ``{source text: {language code: translated text}}`` and mirrors
them to a JSON snapshot file after every insert, so a translation is paid for only once.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING

from core.errors import DeserializationError, PersistenceError
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils
from utils.rwlock import AsyncRWLock

if TYPE_CHECKING:
    import logging

__all__: list[str] = ["TranslationCache"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

type TranslationMap = dict[str, dict[str, str]]


class TranslationCache:
    """In-memory translation mapping with a JSON snapshot on disk.

    Lookups share a reader/writer lock; inserts take it exclusively. Persisting holds the shared
    side for the whole serialise-and-write, so inserts wait for the file to be written while
    lookups continue. A separate lock keeps two persists from writing the file at once.
    Nothing is ever removed or updated in place; a second insert of the same pair simply
    replaces the value.

    Attributes:
        path (Path): Snapshot file written by persist().
    """

    def __init__(self, path: Path | str) -> None:
        self.path: Path = Path(path)
        self._translations: TranslationMap = {}
        self._lock: AsyncRWLock = AsyncRWLock()
        self._file_lock: asyncio.Lock = asyncio.Lock()

    @classmethod
    def open(cls, path: Path | str) -> TranslationCache:
        """Build a cache bound to ``path`` and load the snapshot if there is one.

        A missing file gives an empty cache. An unreadable or malformed file is logged as a
        warning and also gives an empty cache.

        Args:
            path (Path | str): Snapshot file location.

        Returns:
            TranslationCache: The loaded cache.
        """
        cache = cls(path)
        try:
            snapshot: bytes | None = FileUtils.read_bytes(cache.path)
        except OSError as err:
            logger.warning("Could not read cache '%s': %s", cache.path, err)
            return cache

        if snapshot is None:
            logger.info("No cache file at '%s', starting empty", cache.path)
            return cache

        try:
            cache.load_from(snapshot)
        except DeserializationError as err:
            logger.warning("Could not load cache: %s", err)
        else:
            logger.info("Loaded %d cached translations from '%s'", len(cache), cache.path)
        return cache

    def __len__(self) -> int:
        return sum(len(languages) for languages in self._translations.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        text, language = key
        return language in self._translations.get(text, {})

    async def lookup(self, text: str, language: str) -> str | None:
        """Return the cached translation of ``text`` into ``language``, or None."""
        async with self._lock.read():
            return self._translations.get(text, {}).get(language)

    async def insert(self, text: str, language: str, translated: str) -> None:
        """Store a translation. Callers insert only after a miss; a repeat insert replaces the value."""
        async with self._lock.write():
            self._translations.setdefault(text, {})[language] = translated
        logger.debug("Cached translation to '%s' for '%s'", language, text)

    def load_from(self, snapshot: bytes) -> None:
        """Replace the in-memory mapping with the contents of a snapshot.

        The current mapping is left untouched if the snapshot is rejected.

        Raises:
            DeserializationError: If the bytes are not UTF-8 JSON holding an object whose values
                are objects of strings.
        """
        msg: str
        try:
            decoded = json.loads(snapshot.decode("utf-8"))
        except (ValueError, RecursionError) as err:
            msg = f"malformed cache snapshot: {err}"
            raise DeserializationError(msg) from err

        if not isinstance(decoded, dict):
            msg = f"cache snapshot must be a JSON object, not {type(decoded).__name__}"
            raise DeserializationError(msg)

        translations: TranslationMap = {}
        for text, languages in decoded.items():
            if not isinstance(languages, dict) or not all(
                isinstance(code, str) and isinstance(value, str) for code, value in languages.items()
            ):
                msg = f"cache snapshot entry for {text!r} must map language codes to strings"
                raise DeserializationError(msg)
            translations[text] = dict(languages)

        self._translations = translations

    def serialize(self) -> bytes:
        """Encode the full mapping as indented UTF-8 JSON."""
        return json.dumps(self._translations, ensure_ascii=False, indent=2).encode("utf-8")

    async def persist_to(self, path: Path | str) -> None:
        """Write the whole mapping to ``path``, replacing any previous content.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        target = Path(path)
        async with self._file_lock, self._lock.read():
            data: bytes = self.serialize()
            try:
                await asyncio.to_thread(FileUtils.overwrite, target, data)
            except OSError as err:
                msg: str = f"failed to save cache to '{target}': {err}"
                raise PersistenceError(msg) from err
        logger.debug("Cache saved to '%s' (%d bytes)", target, len(data))

    async def persist(self) -> None:
        """Write the mapping to the snapshot file this cache was opened with.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        await self.persist_to(self.path)
