from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from core.errors import ConfigurationError
from core.shared_data import SharedData
from core.trans.interface import TranslateExceptionError
from tests.fakes import FakeTranslation, fixed_clock

if TYPE_CHECKING:
    from models.config_models import Config


class BrokenCredentialsTranslation(FakeTranslation):
    @staticmethod
    def fetch_engine_name() -> str:
        return "fake_broken_credentials"

    def initialize(self, config) -> None:
        _ = config
        msg = "failed to create translate client: key file not found"
        raise TranslateExceptionError(msg)


@pytest.mark.asyncio
async def test_async_init_builds_collaborators(config: Config) -> None:
    shared = SharedData(config)

    await shared.async_init()

    assert isinstance(shared.translator, FakeTranslation)
    assert shared.translator.is_available is True
    assert shared.cache.path == Path(config.CACHE.FILE).resolve()
    assert len(shared.cache) == 0
    assert (await shared.stats_aggregator.snapshot()).has_activity is False


@pytest.mark.asyncio
async def test_async_init_loads_existing_snapshot(config: Config, tmp_path: Path) -> None:
    (tmp_path / "translation_cache.json").write_text(
        json.dumps({"Good morning, Ana!": {"es": "¡Buenos días, Ana!"}}), encoding="utf-8"
    )
    shared = SharedData(config)

    await shared.async_init()

    assert await shared.cache.lookup("Good morning, Ana!", "es") == "¡Buenos días, Ana!"


@pytest.mark.asyncio
async def test_async_init_requires_project_id(config: Config) -> None:
    config.TRANSLATION.PROJECT_ID = ""

    with pytest.raises(ConfigurationError, match="GOOGLE_CLOUD_PROJECT_ID"):
        await SharedData(config).async_init()


@pytest.mark.asyncio
async def test_async_init_rejects_unknown_engine(config: Config) -> None:
    config.TRANSLATION.ENGINE = "no_such_engine"

    with pytest.raises(ConfigurationError, match="Unknown translation engine"):
        await SharedData(config).async_init()


@pytest.mark.asyncio
async def test_async_init_wraps_provider_failure(config: Config) -> None:
    config.TRANSLATION.ENGINE = BrokenCredentialsTranslation.fetch_engine_name()

    with pytest.raises(ConfigurationError, match="key file not found") as exc_info:
        await SharedData(config).async_init()

    assert isinstance(exc_info.value.__cause__, TranslateExceptionError)


@pytest.mark.asyncio
async def test_engines_share_cache_and_translator(config: Config) -> None:
    shared = SharedData(config, fixed_clock(14))
    await shared.async_init()

    first = shared.new_engine()
    second = shared.new_engine(clock=fixed_clock(23))

    assert first.cache is second.cache is shared.cache
    assert first.translator is second.translator is shared.translator
    assert first.stats is not second.stats
    assert (await first.greet("Ana", "en"))[0] == "Good afternoon, Ana!"
    assert (await second.greet("Ana", "en"))[0] == "Good night, Ana!"


@pytest.mark.asyncio
async def test_close_releases_translator(config: Config) -> None:
    shared = SharedData(config)
    await shared.async_init()

    await shared.close()

    assert shared.translator.closed is True
