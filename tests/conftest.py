"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest
from httpx import ASGITransport, AsyncClient
from openai.types.chat import ChatCompletion
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from storyweave.config import Settings
from storyweave.infrastructure.ai_client import AIClient
from storyweave.infrastructure.models import Base
from storyweave.main import app

# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_settings(**overrides) -> Settings:
    """Create Settings isolated from the environment and .env."""
    values = {
        "ai_api_key": "test-ai-key",
        "firecrawl_api_key": "test-firecrawl-key",
        "perplexity_api_key": "test-perplexity-key",
        "tts_api_key": "test-tts-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_completion(content: str | None, **extra) -> ChatCompletion:
    """Build a chat completion response with one choice."""
    return ChatCompletion.model_validate({
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
        **extra,
    })


def make_status_error(status: int, body: object = None) -> openai.APIStatusError:
    """Build an OpenAI SDK status error for a given HTTP status."""
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return openai.APIStatusError(f"Error code: {status}", response=response, body=body)


def make_ai_client(settings: Settings | None = None, **create_kwargs) -> AIClient:
    """Create an AIClient whose SDK calls are mocked.

    Keyword arguments configure ``chat.completions.create`` (``return_value``
    or ``side_effect``).
    """
    ai_client = AIClient(settings or make_settings())
    ai_client.client = MagicMock()
    ai_client.client.chat = MagicMock()
    ai_client.client.chat.completions = MagicMock()
    ai_client.client.chat.completions.create = AsyncMock(**create_kwargs)
    return ai_client


def make_mock_response(status=200, json_data=None, json_error=None):
    """Create a mock aiohttp response."""
    resp = MagicMock()
    resp.status = status
    if json_error is not None:
        resp.json = AsyncMock(side_effect=json_error)
    else:
        resp.json = AsyncMock(return_value=json_data)
    return resp


def make_mock_session(responses=None, side_effect=None):
    """Create a mock session whose .post() returns async context managers.

    Args:
        responses: List of mock responses (or exceptions to raise) in order.
        side_effect: Single exception raised by every .post().
    """
    mock_session = MagicMock()
    mock_session.closed = False
    items = list(responses or [])
    call_idx = {"i": 0}

    @asynccontextmanager
    async def _post(*args, **kwargs):
        if side_effect is not None:
            raise side_effect
        item = items[call_idx["i"]]
        call_idx["i"] += 1
        if isinstance(item, Exception):
            raise item
        yield item

    mock_session.post = MagicMock(side_effect=lambda *a, **kw: _post(*a, **kw))
    return mock_session


@pytest.fixture
def settings() -> Settings:
    """Settings with every credential configured."""
    return make_settings()


@pytest.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client; dependency overrides are reset afterwards."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
