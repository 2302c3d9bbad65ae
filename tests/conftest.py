"""Shared pytest configuration for EmbedWatch tests."""

import os

import pytest

# Required settings must exist before any module calls get_settings()
os.environ.setdefault("DISCORD_TOKEN", "test-discord-token")
os.environ.setdefault("API_SECRET_KEY", "test-api-secret")

from embedwatch.config import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
