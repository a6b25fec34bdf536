from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from core.cache.manager import TranslationCache
from models.config_models import Config
from tests.fakes import FakeTranslation

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config(tmp_path: Path) -> Config:
    config = Config()
    config.TRANSLATION.ENGINE = "fake"
    config.TRANSLATION.PROJECT_ID = "test-project"
    config.TRANSLATION.CREDENTIALS = str(tmp_path / "service_account.json")
    config.CACHE.FILE = str(tmp_path / "translation_cache.json")
    config.SERVER.STATIC_DIR = str(tmp_path / "dist")
    return config


@pytest.fixture
def cache(tmp_path: Path) -> TranslationCache:
    return TranslationCache(tmp_path / "translation_cache.json")


@pytest.fixture
def translator(config: Config) -> FakeTranslation:
    engine = FakeTranslation()
    engine.initialize(config)
    return engine
