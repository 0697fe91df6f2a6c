"""
Common fixtures for all test modules.
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from relay_api.config.settings import Settings
from relay_api.main import create_app
from relay_api.services.relay_client import get_relay_client

TEST_BASE_URL = "http://test-ollama:11434"
TEST_MODEL = "test-model"


@pytest.fixture
def settings() -> Settings:
    """
    Settings pointing at a fake Ollama host. The `.env` file is ignored so
    local configuration cannot leak into the tests.
    """
    return Settings(
        _env_file=None,
        OLLAMA_BASE_URL=TEST_BASE_URL,
        OLLAMA_MODEL=TEST_MODEL,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def mock_relay_client(app: FastAPI) -> MagicMock:
    """
    Fixture to mock the RelayClient using FastAPI's dependency overrides.
    """
    mock_client = MagicMock()
    mock_client.send = AsyncMock()

    app.dependency_overrides[get_relay_client] = lambda: mock_client
    yield mock_client
    app.dependency_overrides.pop(get_relay_client, None)


@pytest.fixture
async def unit_test_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides a client that talks to the application in-process.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c
