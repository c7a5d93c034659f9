"""Writing feedback service for stored segments."""

import logging

from storyweave.errors import NotFoundError, ValidationError
from storyweave.infrastructure.ai_client import AIClient
from storyweave.repositories.segment_repo import SegmentRepository
from storyweave.services.prompts import FEEDBACK_SYSTEM_PROMPT, build_feedback_prompt

logger = logging.getLogger(__name__)


class FeedbackService:
    """Asks the AI for one improvement suggestion on a segment."""

    def __init__(self, ai_client: AIClient, segment_repo: SegmentRepository) -> None:
        """Initialize the service."""
        self.ai = ai_client
        self.segment_repo = segment_repo

    async def suggest_improvements(self, segment_id: str | None) -> str:
        """Return a 1-2 sentence suggestion for the given segment."""
        if not segment_id or not segment_id.strip():
            raise ValidationError("Segment ID is required")
        self.ai.ensure_configured()

        context = await self.segment_repo.get_feedback_context(segment_id)
        if context is None:
            logger.error(f"Segment not found: {segment_id}")
            raise NotFoundError("Segment not found")

        logger.info(f"Analyzing segment for improvements, genre: {context.genre}")

        suggestions = await self.ai.complete(
            system_prompt=FEEDBACK_SYSTEM_PROMPT,
            user_prompt=build_feedback_prompt(context.genre, context.content),
        )

        logger.info("Improvement suggestions generated successfully")
        return suggestions
