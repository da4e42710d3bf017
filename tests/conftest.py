"""Pytest fixtures for all tests."""

import random

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config, GeneratorConfig, ServiceConfig
from core.generator import FloatingTimeGenerator
from service.app import create_app

# 2024-01-01T00:00:00Z
FIXED_NOW = 1_704_067_200_000


class FakeClock:
    """Settable millisecond clock."""

    def __init__(self, now=FIXED_NOW):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class ScriptedRandom:
    """Returns queued values from randint, checking they are in range."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        value = self.values.pop(0)
        assert a <= value <= b
        return value


@pytest.fixture
def clock():
    """Create a fixed test clock."""
    return FakeClock()


@pytest.fixture
def seeded_rng():
    """Create a deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def generator():
    """Create a generator on the real clock."""
    return FloatingTimeGenerator(time_length=45, time_offset=0)


@pytest.fixture
def app_config():
    """Create test service config."""
    return Config(
        generator=GeneratorConfig(time_length=42, time_offset=1_577_836_800_000),
        service=ServiceConfig(max_batch=10, username="stats", password="s3cret"),
    )


@pytest.fixture
async def app(app_config):
    """Create test FastAPI app."""
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def scripted_rng():
    """Factory for random sources returning queued values."""
    return ScriptedRandom
