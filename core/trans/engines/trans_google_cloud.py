"""Google Cloud Translation API Advanced (v3) implementation.

Requires the google-cloud-translate library, a project ID and a service account key file.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import (
    BadRequest,
    Forbidden,
    GoogleAPIError,
    ResourceExhausted,
    TooManyRequests,
    Unauthorized,
)
from google.auth.exceptions import GoogleAuthError
from google.cloud import translate_v3 as translate

from core.trans.interface import (
    NotSupportedLanguagesError,
    Result,
    TransInterface,
    TranslateExceptionError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from config.loader import Config

__all__: list[str] = ["GoogleCloudTranslation"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class GoogleCloudTranslation(TransInterface):
    """Google Cloud Translation API v3 implementation.

    Authenticates with the service account key file named by ``TRANSLATION.CREDENTIALS``
    (normally taken from GOOGLE_APPLICATION_CREDENTIALS) and bills requests to
    ``projects/<TRANSLATION.PROJECT_ID>``.
    """

    MIME_TYPE: str = "text/plain"

    def __init__(self) -> None:
        super().__init__()
        self.__inst: translate.TranslationServiceClient | None = None
        self._parent: str = ""

    @property
    def _inst(self) -> translate.TranslationServiceClient:
        """Get the client instance.

        Raises:
            TranslateExceptionError: If the instance is not initialized.
        """
        if self.__inst is None:
            msg = "The Google Cloud Translate instance is not initialised"
            raise TranslateExceptionError(msg)
        return self.__inst

    @_inst.setter
    def _inst(self, inst: translate.TranslationServiceClient | None) -> None:
        self.__inst = inst
        logger.debug("'%s': 'set instance'", self.__class__.__name__)

    @property
    def is_available(self) -> bool:
        return self.__inst is not None

    @staticmethod
    def fetch_engine_name() -> str:
        return "google_cloud"

    def initialize(self, config: Config) -> None:
        """Create the Translation Service client.

        Args:
            config (Config): Supplies TRANSLATION.PROJECT_ID and TRANSLATION.CREDENTIALS.

        Raises:
            TranslateExceptionError: If the key file cannot be loaded or the client cannot be built.
        """
        logger.debug("'%s' Initialization start", self.__class__.__name__)
        credentials: str = config.TRANSLATION.CREDENTIALS
        self._parent = f"projects/{config.TRANSLATION.PROJECT_ID}"

        try:
            self._inst = translate.TranslationServiceClient.from_service_account_file(credentials)
        except (GoogleAuthError, OSError, ValueError) as err:
            logger.critical("Failed to load service account key '%s': %s", credentials, err)
            msg: str = f"failed to create translate client: {err}"
            raise TranslateExceptionError(msg) from err
        logger.info("Google Cloud Translation client created for %s", self._parent)

    def _build_request(self, content: str, tgt_lang: str, src_lang: str | None) -> dict[str, Any]:
        request: dict[str, Any] = {
            "parent": self._parent,
            "contents": [content],
            "mime_type": self.MIME_TYPE,
            "target_language_code": tgt_lang,
        }
        if src_lang:
            request["source_language_code"] = src_lang
        return request

    async def translation(self, content: str, tgt_lang: str, src_lang: str | None = None) -> Result:
        """Translate input text to the target language.

        Only the first returned translation is used.

        Raises:
            NotSupportedLanguagesError: If the API rejects the request as invalid.
            TranslationQuotaExceededError: If the project quota is exhausted.
            TranslationRateLimitError: If the API rate-limits the request.
            TranslateExceptionError: If authentication or the call fails, or nothing is returned.
        """
        logger.info("'%s': 'start translation'", self.__class__.__name__)
        logger.debug("'content': '%s', 'src_lang': '%s', 'tgt_lang': '%s'", content, src_lang, tgt_lang)

        request: dict[str, Any] = self._build_request(content, tgt_lang, src_lang)
        msg: str
        try:
            response = await asyncio.to_thread(self._inst.translate_text, request=request)
        except BadRequest as err:
            logger.error("Invalid language code: %s", err)
            msg = f"Unsupported language pair (src: '{src_lang}', tgt: '{tgt_lang}'): {err}"
            raise NotSupportedLanguagesError(msg) from err
        except ResourceExhausted as err:
            logger.error("Google API quota exhausted: %s", err)
            msg = f"Translation quota exceeded: {err}"
            raise TranslationQuotaExceededError(msg) from err
        except TooManyRequests as err:
            logger.error("Google API rate limit during translation: %s", err)
            msg = f"Translation rate limited: {err}"
            raise TranslationRateLimitError(msg) from err
        except (Unauthorized, Forbidden) as err:
            logger.error("Google API rejected the credentials: %s", err)
            msg = f"Authentication failed: {err}"
            raise TranslateExceptionError(msg) from err
        except GoogleAPIError as err:
            logger.error("Google API error during translation: %s", err)
            msg = f"Translation failed: {err}"
            raise TranslateExceptionError(msg) from err
        except TranslateExceptionError:
            raise
        except Exception as err:
            logger.error("Unexpected error during translation: %s", err)
            msg = f"Translation failed: {err}"
            raise TranslateExceptionError(msg) from err

        translations = list(response.translations)
        if not translations:
            msg = "no translation returned"
            raise TranslateExceptionError(msg)

        first = translations[0]
        detected_lang: str | None = getattr(first, "detected_language_code", "") or src_lang
        result = Result(
            text=first.translated_text,
            detected_source_lang=detected_lang.lower() if detected_lang else None,
            metadata={"engine": self.fetch_engine_name()},
        )
        logger.info("translation completed (%s > %s)", src_lang or detected_lang, tgt_lang)
        logger.debug("'return': '%s'", result)
        return result

    async def close(self) -> None:
        """Close the gRPC transport and drop the client."""
        if self.__inst is not None:
            transport = getattr(self.__inst, "transport", None)
            if transport is not None:
                await asyncio.to_thread(transport.close)
        self._inst = None
        logger.info("'%s' process termination", self.__class__.__name__)
