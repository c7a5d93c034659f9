"""OpenAI-compatible AI gateway client."""

import logging

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from storyweave.config import Settings
from storyweave.errors import (
    ConfigurationError,
    EmptyCompletion,
    UpstreamFailure,
    classify_ai_status,
)

logger = logging.getLogger(__name__)


class AIClient:
    """Async chat-completion client for the AI gateway.

    Upstream status errors are classified into ``RateLimited``,
    ``CreditsExhausted`` or ``UpstreamFailure``. Requests are never retried.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize the client from settings."""
        self.api_key = settings.ai_api_key
        self.model = settings.ai_model
        self.client = AsyncOpenAI(
            api_key=self.api_key or "unconfigured",
            base_url=settings.ai_base_url,
            max_retries=0,
        )

    def ensure_configured(self) -> None:
        """Raise if the gateway credential is missing."""
        if not self.api_key:
            raise ConfigurationError("AI_API_KEY is not configured")

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int | None = None,
    ) -> str:
        """Run one chat completion and return the first choice's text.

        Args:
            system_prompt: System instruction
            user_prompt: User message
            max_tokens: Optional completion length cap

        Returns:
            The generated text, verbatim
        """
        self.ensure_configured()

        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                **kwargs,
            )
        except openai.APIStatusError as e:
            logger.error(f"AI API error: {e.status_code} {e.message}")
            raise classify_ai_status(e.status_code) from e
        except openai.APIConnectionError as e:
            logger.error(f"AI API connection failed: {e}")
            raise UpstreamFailure("AI API request failed: connection error") from e

        return extract_message_text(response)


def extract_message_text(response: ChatCompletion) -> str:
    """Get the first choice's message content, checking every level exists."""
    if not response.choices:
        raise EmptyCompletion("AI response contained no choices")
    message = response.choices[0].message
    if message is None or message.content is None:
        raise EmptyCompletion("AI response contained no message content")
    return message.content
