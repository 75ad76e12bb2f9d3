"""
Pytest configuration and fixtures for eventshare tests.

Provides:
- A fixed reference time and a controllable clock
- Factory fixtures for creating events
- Generator and app config fixtures
- Test client for API testing
"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from eventshare.config import AppConfig, get_config, get_settings
from eventshare.main import app
from eventshare.schemas.event import Event, EventStatus
from eventshare.schemas.share import GenerationConfig
from eventshare.services.share_content import (
    ResultCache,
    ShareContentGenerator,
    build_share_content_generator,
)

TEST_DESTINATION_URL = "https://example.com/calendar"

# Naive local wall-clock time: 2024-01-15 10:00
REFERENCE_NOW = datetime(2024, 1, 15, 10, 0)


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 15, 1, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _create_event(
        id: str,
        title: str,
        start_date: datetime,
        status: EventStatus | str = EventStatus.APPROVED,
    ) -> Event:
        return Event(
            id=id,
            title=title,
            start_date=start_date,
            end_date=start_date + timedelta(hours=2),
            status=status,
            link=f"https://connpass.com/event/{id}/",
        )

    return _create_event


@pytest.fixture
def share_config() -> GenerationConfig:
    return GenerationConfig(destination_url=TEST_DESTINATION_URL)


@pytest.fixture
def generator(share_config: GenerationConfig, clock: FakeClock) -> ShareContentGenerator:
    """Generator with its own cache driven by the fake clock."""
    return ShareContentGenerator(
        share_config,
        cache=ResultCache(clock=clock),
        clock=clock,
    )


@pytest.fixture
def app_config(monkeypatch, tmp_path) -> AppConfig:
    """Application config isolated from any local config.yml or .env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SHARE_DESTINATION_URL", TEST_DESTINATION_URL)
    monkeypatch.setenv("SHARE_TIMEZONE", "Asia/Tokyo")
    get_settings.cache_clear()
    get_config.cache_clear()
    yield get_config()
    get_settings.cache_clear()
    get_config.cache_clear()


@pytest_asyncio.fixture
async def client(app_config: AppConfig) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with a fresh share generator."""
    app.state.share_generator = build_share_content_generator(app_config)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.share_generator.cache.dispose()


@pytest.fixture
def reference_now() -> datetime:
    return REFERENCE_NOW
