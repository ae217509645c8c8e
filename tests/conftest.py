# tests/conftest.py
"""
Main pytest configuration and shared fixtures for all tests.

This module provides:
- Async test support (pytest-asyncio auto mode)
- Settings override for test environment
- A mocked language-model client
- FastAPI app and async HTTP client wired to the mock
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from decision_assistant.agent.llm import LLMClient
from decision_assistant.api.app import create_app
from decision_assistant.api.dependencies import get_llm_client
from decision_assistant.config.settings import Settings, get_settings


# ============================================================================
# Settings and Configuration
# ============================================================================

TEST_ENV = {
    "APP_NAME": "Decision Assistant Test",
    "APP_VERSION": "0.1.0-test",
    "ENVIRONMENT": "local",
    "DEBUG": "true",
    "HOST": "127.0.0.1",
    "PORT": "8001",
    "OPENAI_API_KEY": "sk-test-key-for-testing-only",
    "OPENAI_MODEL": "gpt-test",
    "LOG_LEVEL": "40",  # ERROR level to reduce noise in tests
    "LOG_FORMAT": "console",
}


@pytest.fixture(scope="session", autouse=True)
def override_settings():
    """
    Point every get_settings() call at the test environment.

    Modules call get_settings() directly as well as through FastAPI
    dependencies, so the override goes through the environment and the
    settings cache is cleared around the session.
    """
    previous = {key: os.environ.get(key) for key in TEST_ENV}
    os.environ.update(TEST_ENV)
    get_settings.cache_clear()
    get_llm_client.cache_clear()

    yield

    for key, value in previous.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value
    get_settings.cache_clear()
    get_llm_client.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings as the application sees them during tests."""
    return get_settings()


# ============================================================================
# Language Model Fixtures
# ============================================================================


@pytest.fixture
def mock_llm() -> MagicMock:
    """
    Mock LLMClient.

    By default the first call (the reply) returns a short answer and the
    second (the classification) returns a complex/25s verdict. Override
    `mock_llm.complete.side_effect` in a test to change that.

    Usage:
        async def test_something(mock_llm):
            mock_llm.complete.side_effect = ["reply", "importance: trivial\\nduration: 5"]
    """
    llm = MagicMock(spec=LLMClient)
    llm.is_configured = True
    llm.complete = AsyncMock(
        side_effect=[
            "It might help to think about your budget constraints here.",
            "importance: complex\nduration: 25",
        ]
    )
    llm.close = AsyncMock()
    return llm


# ============================================================================
# FastAPI Application and Client
# ============================================================================

@pytest.fixture
def app(mock_llm: MagicMock) -> FastAPI:
    """
    Create FastAPI application for testing.

    The LLM dependency is replaced with `mock_llm`.
    """
    application = create_app()
    application.dependency_overrides[get_llm_client] = lambda: mock_llm
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client for testing FastAPI endpoints.

    Usage:
        async def test_endpoint(async_client):
            response = await async_client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def conversation() -> list[dict[str, str]]:
    """A short conversation ending with a user turn."""
    return [
        {"role": "assistant", "content": "What decision are you facing?"},
        {"role": "user", "content": "Should I accept a job offer from a startup?"},
    ]
