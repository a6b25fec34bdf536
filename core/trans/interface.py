"""Abstract base class for translation providers and the exceptions they raise.

Providers register themselves by name when subclassed, so the configured ``TRANSLATION.ENGINE``
can be resolved to a class without an explicit lookup table.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config

__all__: list[str] = [
    "NotSupportedLanguagesError",
    "Result",
    "TransInterface",
    "TranslateExceptionError",
    "TranslationQuotaExceededError",
    "TranslationRateLimitError",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


@dataclass
class Result:
    """Data class for translation results.

    Attributes:
        text (str | None): First translated variant returned by the provider. None if there was none.
        detected_source_lang (str | None): Source language reported by the provider, if any.
        metadata (dict[str, str] | None): Provider-specific metadata.
    """

    text: str | None = None
    detected_source_lang: str | None = None
    metadata: dict[str, str] | None = None

    def __str__(self) -> str:
        if self.text is None:
            return ""
        return self.text


class TranslateExceptionError(Exception):
    """An error occurred during the translation process."""


class NotSupportedLanguagesError(TranslateExceptionError):
    """An unsupported language code was specified."""


class TranslationQuotaExceededError(TranslateExceptionError):
    """The translatable character quota has been exceeded."""


class TranslationRateLimitError(TranslateExceptionError):
    """The translation request was rate-limited by the API."""


class TransInterface(ABC):
    """Abstract base class for translation providers.

    Attributes:
        registered (ClassVar[dict[str, type[TransInterface]]]): Provider classes keyed by their
            distinguished names.
    """

    registered: ClassVar[dict[str, type[TransInterface]]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        """Register the subclass under its distinguished name.

        Subclasses returning an empty name are left out of the registry.

        Raises:
            ValueError: If another provider already uses the name.
        """
        super().__init_subclass__(**kwargs)
        name: str = cls.fetch_engine_name()
        if not isinstance(name, str) or name == "":
            return

        if name in cls.registered:
            msg: str = f"A translation engine with the name '{name}' is already registered."
            raise ValueError(msg)

        cls.registered[name] = cls
        logger.debug("Translation engine '%s' registered", name)

    @classmethod
    def create(cls, name: str) -> TransInterface:
        """Instantiate the registered provider called ``name``.

        Raises:
            KeyError: If no provider is registered under that name.
        """
        return cls.registered[name]()

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the provider has been initialised and can accept requests."""
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def fetch_engine_name() -> str:
        """Fetch the distinguished name of the provider.

        Called from __init_subclass__, so it must work on the class alone.
        """
        raise NotImplementedError

    @abstractmethod
    def initialize(self, config: Config) -> None:
        """Create the provider client from configuration.

        Raises:
            TranslateExceptionError: If the client cannot be created or authenticated.
        """
        raise NotImplementedError

    @abstractmethod
    async def translation(self, content: str, tgt_lang: str, src_lang: str | None = None) -> Result:
        """Translate input text to the target language.

        Args:
            content (str): Text to be translated.
            tgt_lang (str): Target language code. Passed through unvalidated.
            src_lang (str | None): Source language code.

        Returns:
            Result: Translation result; ``text`` holds the first variant.

        Raises:
            NotSupportedLanguagesError: If the provider rejects the language code.
            TranslationQuotaExceededError: If the character quota has been exceeded.
            TranslationRateLimitError: If the request is rate-limited by the API.
            TranslateExceptionError: If translation fails for any other reason.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release the provider client."""
        raise NotImplementedError
