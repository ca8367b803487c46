"""Pytest fixtures for malclient tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from malclient.client import MALClient
from malclient.config import ClientConfig

BASE_URL = "https://mal.test/"
API_URL = "https://api.mal.test/v2/"


def make_config(**overrides: object) -> ClientConfig:
    """Build a ClientConfig pointing at the test hosts."""
    defaults: dict[str, object] = {
        "base_url": BASE_URL,
        "api_url": API_URL,
        "user_agent": "TestAgent",
        "timeout": 5.0,
    }
    defaults.update(overrides)
    return ClientConfig(**defaults)  # type: ignore[arg-type]


@pytest.fixture
async def legacy_client() -> AsyncIterator[MALClient]:
    """Client authenticated for the legacy API as TestUser:TestPass."""
    async with MALClient(make_config(), username="TestUser", password="TestPass") as client:
        yield client


@pytest.fixture
async def api_client() -> AsyncIterator[MALClient]:
    """Client authenticated for the v2 API with a static token."""
    async with MALClient(make_config(), token="test-token") as client:
        yield client
