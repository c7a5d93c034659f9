"""AI story continuation service."""

import logging
from collections.abc import Sequence

from storyweave.domain.segment import StorySegment
from storyweave.errors import ValidationError
from storyweave.infrastructure.ai_client import AIClient
from storyweave.services.prompts import build_continuation_prompt, select_system_prompt

logger = logging.getLogger(__name__)


class StoryGeneratorService:
    """Generates the next AI-written segment of a story."""

    def __init__(self, ai_client: AIClient) -> None:
        """Initialize the generator."""
        self.ai = ai_client

    async def generate_continuation(
        self,
        previous_segments: Sequence[StorySegment],
        genre: str | None,
    ) -> str:
        """Generate 2-3 paragraphs continuing the story.

        Args:
            previous_segments: Story so far, in sequence order
            genre: Story genre; unknown genres use the sci-fi prompt

        Returns:
            The generated continuation, unmodified
        """
        self.ai.ensure_configured()
        if not previous_segments:
            raise ValidationError("Previous segments are required")

        logger.info(f"Generating story continuation for genre: {genre}")

        continuation = await self.ai.complete(
            system_prompt=select_system_prompt(genre),
            user_prompt=build_continuation_prompt(genre, previous_segments),
        )

        logger.info("Story continuation generated successfully")
        return continuation
