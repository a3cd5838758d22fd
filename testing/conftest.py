"""
Pytest configuration for the relay tests.

No real browser is launched: every test that needs extraction uses
FakeExtractor, and cache freshness is driven by FakeClock.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from iframe_relay.errors import ExtractionError
from iframe_relay.utils import CacheFileSys, ConfigStore
from relay_web.backend.app import create_app
from relay_web.backend.config import RelaySettings

EMBED_URL = "https://rutube.ru/play/embed/123"
TRACKED_URL = "https://yandex.ru/video/preview/1234567890"
START_MS = 1_700_000_000_000


class FakeExtractor:
    """Records calls and returns a canned iframe URL or raises."""

    def __init__(self, result: str = EMBED_URL, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def extract(self, page_url: str) -> str:
        self.calls.append(page_url)
        if self.gate is not None:
            await self.gate.wait()
        if not page_url:
            raise ExtractionError("No page URL given", page_url=page_url)
        if self.error is not None:
            raise self.error
        return self.result


class FakeClock:
    def __init__(self, now: int = START_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path, data):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(tmp_path) -> RelaySettings:
    return RelaySettings(
        config_file=str(tmp_path / "config.json"),
        cache_file=str(tmp_path / "video_cache.json"),
        log_dir=str(tmp_path / "logs"),
        log_console=False,
    )


@pytest.fixture
def cache(settings) -> CacheFileSys:
    return CacheFileSys(settings.cache_file)


@pytest.fixture
def config(settings) -> ConfigStore:
    return ConfigStore(settings.config_file)


@pytest.fixture
def client(settings, extractor) -> Generator[TestClient, None, None]:
    app = create_app(settings=settings, extractor=extractor)
    with TestClient(app) as test_client:
        yield test_client
