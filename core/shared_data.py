"""Shared collaborators for greeting requests.

SharedData holds everything that outlives a single request: the configuration, the translation
cache, the translation provider and the aggregate statistics. It is built once (per CLI run or
per server) and passed explicitly to whatever creates GreetingEngine instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import core.trans.engines  # noqa: F401  # registers the bundled providers
from core.cache.manager import TranslationCache
from core.errors import ConfigurationError
from core.greeter import GreetingEngine, validate_config
from core.stats import StatsAggregator
from core.trans.interface import TransInterface, TranslateExceptionError
from utils.file_utils import FileUtils
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable
    from datetime import datetime

    from config.loader import Config


__all__: list[str] = ["SharedData"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


@dataclass
class SharedData:
    _config: Config = field()
    _cache: TranslationCache = field(init=False)
    _translator: TransInterface = field(init=False)
    _stats_aggregator: StatsAggregator = field(init=False)
    _clock: Callable[[], datetime] | None = field(default=None)

    async def async_init(self) -> None:
        """Validate the configuration, open the cache and initialise the provider.

        Raises:
            ConfigurationError: If settings are missing, the engine name is unknown, or the
                provider client cannot be created.
        """
        validate_config(self.config)

        engine_name: str = self.config.TRANSLATION.ENGINE
        try:
            translator: TransInterface = TransInterface.create(engine_name)
        except KeyError:
            msg: str = f"Unknown translation engine '{engine_name}'"
            raise ConfigurationError(msg) from None

        try:
            translator.initialize(self.config)
        except TranslateExceptionError as err:
            raise ConfigurationError(str(err)) from err

        self._translator = translator
        self._cache = TranslationCache.open(FileUtils.resolve_path(self.config.CACHE.FILE))
        self._stats_aggregator = StatsAggregator()
        logger.info("Shared data initialised (engine: '%s', cache: '%s')", engine_name, self._cache.path)

    def new_engine(self, *, clock: Callable[[], datetime] | None = None) -> GreetingEngine:
        """Create a GreetingEngine for one request.

        The engine reads the hour from ``clock``, falling back to the clock SharedData was built
        with and then to the local time.

        Raises:
            ConfigurationError: If the configuration is incomplete.
        """
        return GreetingEngine(self.config, self.cache, self.translator, clock=clock or self._clock)

    async def close(self) -> None:
        await self.translator.close()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def cache(self) -> TranslationCache:
        return self._cache

    @property
    def translator(self) -> TransInterface:
        return self._translator

    @property
    def stats_aggregator(self) -> StatsAggregator:
        return self._stats_aggregator
