"""Story writing endpoints: continuation, feedback and narration."""

from fastapi import APIRouter, Response

from storyweave.api.dependencies import FeedbackDep, NarrationDep, StoryGeneratorDep
from storyweave.api.v1.schemas import (
    ERROR_RESPONSES,
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
    GenerationRequest,
    GenerationResponse,
    NarrationRequest,
)

router = APIRouter(tags=["stories"])


@router.post(
    "/generate-story",
    response_model=GenerationResponse,
    responses=ERROR_RESPONSES,
)
async def generate_story(
    request: GenerationRequest,
    generator: StoryGeneratorDep,
) -> GenerationResponse:
    """Generate the AI's next segment for a story."""
    continuation = await generator.generate_continuation(
        request.to_segments(), request.genre
    )
    return GenerationResponse(continuation=continuation)


@router.post(
    "/suggest-improvements",
    response_model=FeedbackResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse, "description": "Segment not found"}},
)
async def suggest_improvements(
    request: FeedbackRequest,
    feedback: FeedbackDep,
) -> FeedbackResponse:
    """Get one writing suggestion for a stored segment."""
    suggestions = await feedback.suggest_improvements(request.segment_id)
    return FeedbackResponse(suggestions=suggestions)


@router.post(
    "/narrate-segment",
    response_class=Response,
    responses={200: {"content": {"audio/mpeg": {}}}, **ERROR_RESPONSES},
)
async def narrate_segment(
    request: NarrationRequest,
    narration: NarrationDep,
) -> Response:
    """Narrate segment text as mp3 audio."""
    audio = await narration.narrate(request.text)
    return Response(content=audio, media_type="audio/mpeg")
