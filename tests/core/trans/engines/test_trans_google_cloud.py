from __future__ import annotations

from types import SimpleNamespace
from typing import Any, ClassVar

import pytest

from core.trans.engines import trans_google_cloud as trans_google_cloud_module
from core.trans.interface import (
    NotSupportedLanguagesError,
    Result,
    TranslateExceptionError,
    TranslationQuotaExceededError,
    TranslationRateLimitError,
)


class DummyTransport:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class DummyClient:
    translations: ClassVar[list[Any]] = []
    translate_error: ClassVar[Exception | None] = None
    load_error: ClassVar[Exception | None] = None
    instances: ClassVar[list[DummyClient]] = []

    def __init__(self, credentials_file: str) -> None:
        self.credentials_file = credentials_file
        self.requests: list[dict[str, Any]] = []
        self.transport = DummyTransport()

    @classmethod
    def from_service_account_file(cls, filename: str) -> DummyClient:
        if cls.load_error is not None:
            raise cls.load_error
        client = cls(filename)
        cls.instances.append(client)
        return client

    def translate_text(self, request: dict[str, Any]) -> SimpleNamespace:
        self.requests.append(request)
        err = type(self).translate_error
        if err is not None:
            raise err
        return SimpleNamespace(translations=type(self).translations)


@pytest.fixture(autouse=True)
def setup_google_cloud_module(monkeypatch: pytest.MonkeyPatch) -> None:
    DummyClient.translations = [SimpleNamespace(translated_text="¡Hola!", detected_language_code="")]
    DummyClient.translate_error = None
    DummyClient.load_error = None
    DummyClient.instances = []
    monkeypatch.setattr(trans_google_cloud_module.translate, "TranslationServiceClient", DummyClient)

    async def fake_to_thread(func, *args, **kwargs):
        return func(*args, **kwargs)

    monkeypatch.setattr(trans_google_cloud_module.asyncio, "to_thread", fake_to_thread)


@pytest.fixture
def config() -> Any:
    return SimpleNamespace(TRANSLATION=SimpleNamespace(PROJECT_ID="my-project", CREDENTIALS="/keys/sa.json"))


@pytest.fixture
def engine(config: Any) -> trans_google_cloud_module.GoogleCloudTranslation:
    engine = trans_google_cloud_module.GoogleCloudTranslation()
    engine.initialize(config)
    return engine


def test_registered_under_google_cloud() -> None:
    registered = trans_google_cloud_module.TransInterface.registered
    assert registered["google_cloud"] is trans_google_cloud_module.GoogleCloudTranslation


def test_inst_property_raises_when_uninitialized() -> None:
    engine = trans_google_cloud_module.GoogleCloudTranslation()

    assert engine.is_available is False
    with pytest.raises(TranslateExceptionError):
        _ = engine._inst


def test_initialize_loads_service_account_file(engine: trans_google_cloud_module.GoogleCloudTranslation) -> None:
    assert engine.is_available is True
    assert isinstance(engine._inst, DummyClient)
    assert engine._inst.credentials_file == "/keys/sa.json"


@pytest.mark.parametrize("error", [FileNotFoundError("missing"), ValueError("bad key")])
def test_initialize_failure_raises_translate_exception(config: Any, error: Exception) -> None:
    DummyClient.load_error = error
    engine = trans_google_cloud_module.GoogleCloudTranslation()

    with pytest.raises(TranslateExceptionError, match="failed to create translate client"):
        engine.initialize(config)
    assert engine.is_available is False


@pytest.mark.asyncio
async def test_translation_sends_v3_request(engine: trans_google_cloud_module.GoogleCloudTranslation) -> None:
    result: Result = await engine.translation("Good morning, Ana!", tgt_lang="es", src_lang="en")

    assert result.text == "¡Hola!"
    assert result.detected_source_lang == "en"
    assert result.metadata == {"engine": "google_cloud"}
    assert engine._inst.requests == [
        {
            "parent": "projects/my-project",
            "contents": ["Good morning, Ana!"],
            "mime_type": "text/plain",
            "target_language_code": "es",
            "source_language_code": "en",
        }
    ]


@pytest.mark.asyncio
async def test_translation_without_source_language_omits_it(
    engine: trans_google_cloud_module.GoogleCloudTranslation,
) -> None:
    DummyClient.translations = [SimpleNamespace(translated_text="Bonjour", detected_language_code="EN")]

    result = await engine.translation("Hello", tgt_lang="fr")

    assert "source_language_code" not in engine._inst.requests[0]
    assert result.detected_source_lang == "en"


@pytest.mark.asyncio
async def test_translation_uses_first_variant(engine: trans_google_cloud_module.GoogleCloudTranslation) -> None:
    DummyClient.translations = [
        SimpleNamespace(translated_text="first", detected_language_code=""),
        SimpleNamespace(translated_text="second", detected_language_code=""),
    ]

    result = await engine.translation("Hello", tgt_lang="de", src_lang="en")

    assert str(result) == "first"


@pytest.mark.asyncio
async def test_translation_empty_response_raises(engine: trans_google_cloud_module.GoogleCloudTranslation) -> None:
    DummyClient.translations = []

    with pytest.raises(TranslateExceptionError, match="no translation returned"):
        await engine.translation("Hello", tgt_lang="de", src_lang="en")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (trans_google_cloud_module.BadRequest("invalid target"), NotSupportedLanguagesError),
        (trans_google_cloud_module.ResourceExhausted("quota"), TranslationQuotaExceededError),
        (trans_google_cloud_module.TooManyRequests("limit"), TranslationRateLimitError),
        (trans_google_cloud_module.Forbidden("denied"), TranslateExceptionError),
        (trans_google_cloud_module.GoogleAPIError("boom"), TranslateExceptionError),
        (RuntimeError("unexpected"), TranslateExceptionError),
    ],
)
async def test_translation_maps_api_errors(
    engine: trans_google_cloud_module.GoogleCloudTranslation, error: Exception, expected: type[Exception]
) -> None:
    DummyClient.translate_error = error

    with pytest.raises(expected) as exc_info:
        await engine.translation("Hello", tgt_lang="xx", src_lang="en")

    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_translation_before_initialize_raises() -> None:
    engine = trans_google_cloud_module.GoogleCloudTranslation()

    with pytest.raises(TranslateExceptionError, match="not initialised"):
        await engine.translation("Hello", tgt_lang="de")


@pytest.mark.asyncio
async def test_close_closes_transport_and_drops_client(
    engine: trans_google_cloud_module.GoogleCloudTranslation,
) -> None:
    client = DummyClient.instances[0]

    await engine.close()

    assert client.transport.closed is True
    assert engine.is_available is False


@pytest.mark.asyncio
async def test_close_without_client_is_noop() -> None:
    engine = trans_google_cloud_module.GoogleCloudTranslation()

    await engine.close()

    assert engine.is_available is False
