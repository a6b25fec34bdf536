"""Time-of-day greetings, translated through the cache.

A GreetingEngine serves one request: it composes the English greeting for the current hour,
returns it directly for the default language, and otherwise translates it, asking the shared
TranslationCache first and the provider only on a miss. Every step is counted in the engine's
own Stats.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Final

from core.errors import ConfigurationError, PersistenceError, TranslationError
from core.trans.interface import TranslateExceptionError
from models.stats_models import Stats
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from config.loader import Config
    from core.cache.manager import TranslationCache
    from core.trans.interface import Result, TransInterface

__all__: list[str] = ["DEFAULT_LANGUAGE", "GreetingEngine", "compose_greeting", "validate_config"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

DEFAULT_LANGUAGE: Final[str] = "en"

# (first hour after the bucket, greeting); from the last bound until midnight it is _LATE_GREETING
_GREETING_BUCKETS: Final[tuple[tuple[int, str], ...]] = (
    (12, "Good morning"),
    (17, "Good afternoon"),
    (22, "Good evening"),
)
_LATE_GREETING: Final[str] = "Good night"


def compose_greeting(recipient: str, hour: int) -> str:
    """Build the English greeting for an hour of the day.

    Args:
        recipient (str): Name to greet.
        hour (int): Hour of the day, 0 to 23.

    Returns:
        str: e.g. "Good afternoon, Alice!".

    Raises:
        ValueError: If hour is outside 0 to 23.
    """
    if not 0 <= hour < 24:
        msg: str = f"hour must be between 0 and 23: {hour}"
        raise ValueError(msg)

    for upper, greeting in _GREETING_BUCKETS:
        if hour < upper:
            return f"{greeting}, {recipient}!"
    return f"{_LATE_GREETING}, {recipient}!"


def validate_config(config: Config) -> None:
    """Check the settings an engine cannot work without.

    Raises:
        ConfigurationError: If the project ID or the credentials are missing.
    """
    if not config.TRANSLATION.PROJECT_ID:
        msg = "GOOGLE_CLOUD_PROJECT_ID environment variable is not set"
        raise ConfigurationError(msg)
    if not config.TRANSLATION.CREDENTIALS:
        msg = (
            "GOOGLE_APPLICATION_CREDENTIALS environment variable is not set. "
            "Please set it to the path of your service account key"
        )
        raise ConfigurationError(msg)


class GreetingEngine:
    """Greets one recipient in one language and records what it cost.

    Args:
        config (Config): Must carry a project ID and credentials.
        cache (TranslationCache): Cache shared with other engines.
        translator (TransInterface): Initialised translation provider.
        clock (Callable[[], datetime] | None): Source of the current time. Defaults to datetime.now.

    Raises:
        ConfigurationError: If the configuration is incomplete.
    """

    def __init__(
        self,
        config: Config,
        cache: TranslationCache,
        translator: TransInterface,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        validate_config(config)
        self.config: Config = config
        self.cache: TranslationCache = cache
        self.translator: TransInterface = translator
        self.clock: Callable[[], datetime] = clock or datetime.now
        self.default_language: str = config.TRANSLATION.SOURCE_LANGUAGE or DEFAULT_LANGUAGE
        self.stats: Stats = Stats()

    async def greet(self, recipient: str, language: str) -> tuple[str, Stats]:
        """Produce the greeting for ``recipient`` in ``language``.

        The default language needs no translation and is counted as one cache hit, since the
        built-in English text stands in for a cached entry.

        Returns:
            tuple[str, Stats]: The greeting and this engine's statistics.

        Raises:
            TranslationError: If the greeting had to be translated and the provider failed.
        """
        greeting: str = compose_greeting(recipient, self.clock().hour)

        if language == self.default_language:
            self.stats.record_cache_hit()
            logger.debug("Default language '%s' requested, translation skipped", language)
            return greeting, self.stats

        translated: str = await self.translate(greeting, language)
        return translated, self.stats

    async def translate(self, text: str, language: str) -> str:
        """Translate ``text`` into ``language``, using the cache when possible.

        On a miss the call is counted (characters and estimated cost included) before the
        provider is contacted, and stays counted if the provider fails. No lock is held while
        waiting for the provider, so concurrent misses on the same pair may each call it.

        Raises:
            TranslationError: If the provider fails or returns no translation. The cache is
                not modified in that case.
        """
        cached: str | None = await self.cache.lookup(text, language)
        if cached is not None:
            self.stats.record_cache_hit()
            logger.debug("Cache hit for '%s'", language)
            return cached

        self.stats.record_api_call(text)
        logger.info("Translating text to %s", language)

        try:
            result: Result = await self.translator.translation(
                text, tgt_lang=language, src_lang=self.default_language
            )
        except TranslateExceptionError as err:
            msg: str = f"translation failed: {err}"
            raise TranslationError(msg) from err

        if result.text is None:
            msg = "no translation returned"
            raise TranslationError(msg)

        await self.cache.insert(text, language, result.text)
        try:
            await self.cache.persist()
        except PersistenceError as err:
            logger.warning("Failed to save cache: %s", err)

        return result.text
