"""FastAPI dependency injection providers."""

import secrets
from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from storyweave.config import Settings, get_settings
from storyweave.errors import ForbiddenError
from storyweave.infrastructure.ai_client import AIClient
from storyweave.infrastructure.database import get_session
from storyweave.infrastructure.speech_client import SpeechClient
from storyweave.repositories.segment_repo import SegmentRepository
from storyweave.research import SearchProvider, build_query_extractor, build_search_provider
from storyweave.services.feedback import FeedbackService
from storyweave.services.narration import NarrationService
from storyweave.services.research import ResearchService
from storyweave.services.story_generator import StoryGeneratorService

SettingsDep = Annotated[Settings, Depends(get_settings)]

# Type alias for database session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]

# --- API Key Authentication ---

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(
    settings: SettingsDep,
    api_key: str | None = Security(_api_key_header),
) -> str:
    """Verify API key for dev endpoints.

    If API_KEY is not configured (empty), auth is skipped (dev mode).
    """
    if not settings.api_key:
        return "anonymous"
    if not api_key or not secrets.compare_digest(api_key, settings.api_key):
        raise ForbiddenError("Invalid or missing API key")
    return api_key


ApiKeyDep = Annotated[str, Depends(require_api_key)]


# --- Upstream clients (one per process) ---


@lru_cache
def get_ai_client() -> AIClient:
    """Provide the shared AI gateway client."""
    return AIClient(get_settings())


@lru_cache
def get_speech_client() -> SpeechClient:
    """Provide the shared text-to-speech client."""
    return SpeechClient(get_settings())


@lru_cache
def get_search_provider() -> SearchProvider:
    """Provide the configured search provider."""
    return build_search_provider(get_settings())


AIClientDep = Annotated[AIClient, Depends(get_ai_client)]
SpeechClientDep = Annotated[SpeechClient, Depends(get_speech_client)]
SearchProviderDep = Annotated[SearchProvider, Depends(get_search_provider)]


# --- Services ---


async def get_segment_repository(
    session: SessionDep,
) -> AsyncGenerator[SegmentRepository, None]:
    """Provide SegmentRepository instance."""
    yield SegmentRepository(session)


SegmentRepoDep = Annotated[SegmentRepository, Depends(get_segment_repository)]


def get_story_generator(ai_client: AIClientDep) -> StoryGeneratorService:
    """Provide StoryGeneratorService instance."""
    return StoryGeneratorService(ai_client)


def get_feedback_service(
    ai_client: AIClientDep,
    segment_repo: SegmentRepoDep,
) -> FeedbackService:
    """Provide FeedbackService instance."""
    return FeedbackService(ai_client, segment_repo)


def get_narration_service(
    speech_client: SpeechClientDep,
    settings: SettingsDep,
) -> NarrationService:
    """Provide NarrationService instance."""
    return NarrationService(speech_client, settings.tts_max_text_length)


def get_research_service(
    settings: SettingsDep,
    ai_client: AIClientDep,
    provider: SearchProviderDep,
) -> ResearchService:
    """Provide ResearchService with the configured strategies."""
    return ResearchService(build_query_extractor(settings, ai_client), provider)


# Type aliases for commonly used dependencies
StoryGeneratorDep = Annotated[StoryGeneratorService, Depends(get_story_generator)]
FeedbackDep = Annotated[FeedbackService, Depends(get_feedback_service)]
NarrationDep = Annotated[NarrationService, Depends(get_narration_service)]
ResearchDep = Annotated[ResearchService, Depends(get_research_service)]
