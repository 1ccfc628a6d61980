"""Shared test fixtures — fake clock, cache, and a Spoonacular client on a mock transport."""

import os

import httpx
import pytest

# Set required env vars before any app imports
os.environ.setdefault("SPOONACULAR_KEY", "test-key")
os.environ.setdefault("SPOONACULAR_BASE_URL", "https://spoonacular.test")
os.environ.setdefault("ENVIRONMENT", "test")

from config import settings  # noqa: E402
from services.cache import TTLCache  # noqa: E402
from services.spoonacular import SpoonacularClient  # noqa: E402


class FakeClock:
    """Manually advanced time source for the cache."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(clock=clock)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Redirect response dumps into a temp dir."""
    monkeypatch.setattr(settings, "data_dir", str(tmp_path))
    return tmp_path


def make_spoonacular(handler) -> SpoonacularClient:
    """SpoonacularClient whose requests are answered by `handler(request)`."""
    return SpoonacularClient(
        api_key="test-key",
        base_url="https://spoonacular.test",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )
