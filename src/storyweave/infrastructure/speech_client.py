"""OpenAI-compatible text-to-speech client."""

import logging

import openai
from openai import AsyncOpenAI

from storyweave.config import Settings
from storyweave.errors import ConfigurationError, UpstreamFailure, classify_ai_status

logger = logging.getLogger(__name__)


class SpeechClient:
    """Async client for an OpenAI-compatible ``/audio/speech`` endpoint."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the client from settings."""
        self.api_key = settings.tts_api_key
        self.model = settings.tts_model
        self.voice = settings.tts_voice
        self.client = AsyncOpenAI(
            api_key=self.api_key or "unconfigured",
            base_url=settings.tts_base_url,
            max_retries=0,
        )

    async def synthesize(self, text: str) -> bytes:
        """Synthesize speech for text and return mp3 bytes."""
        if not self.api_key:
            raise ConfigurationError("TTS_API_KEY is not configured")

        try:
            response = await self.client.audio.speech.create(
                model=self.model,
                voice=self.voice,
                input=text,
                response_format="mp3",
            )
        except openai.APIStatusError as e:
            logger.error(f"TTS API error: {e.status_code} {e.message}")
            raise classify_ai_status(e.status_code) from e
        except openai.APIConnectionError as e:
            logger.error(f"TTS API connection failed: {e}")
            raise UpstreamFailure("Narration request failed: connection error") from e

        audio = response.content
        if not audio:
            raise UpstreamFailure("Narration response contained no audio")
        return audio
