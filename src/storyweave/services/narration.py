"""Segment narration service."""

import logging

from storyweave.errors import ValidationError
from storyweave.infrastructure.speech_client import SpeechClient

logger = logging.getLogger(__name__)


class NarrationService:
    """Turns segment text into narration audio, one upstream call per request."""

    def __init__(self, speech_client: SpeechClient, max_text_length: int) -> None:
        """Initialize the service."""
        self.speech = speech_client
        self.max_text_length = max_text_length

    async def narrate(self, text: str | None) -> bytes:
        """Synthesize narration audio for text."""
        if not text or not text.strip():
            raise ValidationError("Text is required")
        if len(text) > self.max_text_length:
            raise ValidationError(
                f"Text too long (max {self.max_text_length} characters)"
            )

        logger.info(f"Narrating {len(text)} characters")
        audio = await self.speech.synthesize(text)
        logger.info(f"Narration generated: {len(audio)} bytes")
        return audio
