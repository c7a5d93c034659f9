"""Pydantic schemas for API request/response models.

Request field names follow the web client's camelCase; snake_case is also
accepted.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from storyweave.domain.segment import StorySegment


class SegmentInput(BaseModel):
    """A previous segment sent by the client."""

    content: str
    is_ai_generated: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_ai_generated", "isAiGenerated"),
    )


class GenerationRequest(BaseModel):
    """Request schema for story continuation."""

    previous_segments: list[SegmentInput] = Field(
        default_factory=list,
        validation_alias=AliasChoices("previousSegments", "previous_segments"),
    )
    genre: str | None = None

    def to_segments(self) -> list[StorySegment]:
        """Convert to domain segments, keeping the client's order."""
        return [
            StorySegment(
                id=None,
                story_id=None,
                content=seg.content,
                is_ai_generated=seg.is_ai_generated,
                sequence_order=index,
            )
            for index, seg in enumerate(self.previous_segments)
        ]


class GenerationResponse(BaseModel):
    """Response schema for story continuation."""

    continuation: str


class FeedbackRequest(BaseModel):
    """Request schema for writing feedback."""

    segment_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("segmentId", "segment_id"),
    )


class FeedbackResponse(BaseModel):
    """Response schema for writing feedback."""

    suggestions: str


class NarrationRequest(BaseModel):
    """Request schema for narration."""

    text: str | None = None


class ResearchRequest(BaseModel):
    """Request schema for research."""

    content: str | None = None


class ResearchResponse(BaseModel):
    """Response schema for research."""

    summary: str
    query: str
    citations: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint."""

    error: str
    classification: str | None = None


class BatchTestRequest(BaseModel):
    """Optional overrides for a research batch run."""

    calls: int | None = Field(default=None, ge=1, le=100)
    delay_ms: int | None = Field(
        default=None,
        ge=0,
        le=10_000,
        validation_alias=AliasChoices("delayMs", "delay_ms"),
    )


class CallResultResponse(BaseModel):
    """One call within a batch run."""

    model_config = ConfigDict(from_attributes=True)

    index: int
    success: bool
    duration: int
    error: str | None = None


class BatchTestResponse(BaseModel):
    """Aggregate batch run result."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    successful: int
    failed: int
    avg_duration: int = Field(serialization_alias="avgDuration")
    results: list[CallResultResponse]


ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Missing or malformed input"},
    402: {"model": ErrorResponse, "description": "Upstream credits depleted"},
    429: {"model": ErrorResponse, "description": "Rate limited or quota exceeded"},
    500: {"model": ErrorResponse, "description": "Configuration or upstream failure"},
}
