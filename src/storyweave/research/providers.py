"""Web search providers for research."""

from typing import Any

import aiohttp
import openai
from aiohttp import ClientTimeout
from openai import AsyncOpenAI
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from storyweave.domain.research import ResearchResult, SearchResult
from storyweave.errors import ConfigurationError, UpstreamFailure, classify_search_failure
from storyweave.research.base import SearchProvider
from storyweave.research.summary import MAX_RESULTS, summarize_results

PERPLEXITY_SYSTEM_PROMPT = (
    "You are a research assistant. Provide a brief, factual summary (2-3 sentences) "
    "about the topic. Focus on interesting facts that could inspire creative writing."
)

NO_ANSWER_SUMMARY = "No research found."


# --- Firecrawl response models ---


class FirecrawlResult(BaseModel):
    """One hit in a Firecrawl search response."""

    url: str | None = None
    title: str | None = None
    description: str | None = None
    markdown: str | None = None


class FirecrawlSearchResponse(BaseModel):
    """Firecrawl ``/search`` response body."""

    success: bool = True
    data: list[FirecrawlResult] = Field(default_factory=list)
    error: str | None = None


class FirecrawlSearchProvider(SearchProvider):
    """Async client for the Firecrawl search API."""

    name = "Firecrawl"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        limit: int = MAX_RESULTS,
        timeout_seconds: int = 30,
    ) -> None:
        """Initialize Firecrawl client.

        Args:
            api_key: Firecrawl API key
            base_url: Firecrawl API base URL
            limit: Maximum results per search
            timeout_seconds: Request timeout in seconds
        """
        super().__init__(api_key)
        self.base_url = base_url.rstrip("/")
        self.limit = limit
        self.timeout = ClientTimeout(total=timeout_seconds)
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    @staticmethod
    async def _read_json(response: aiohttp.ClientResponse) -> Any:
        """Decode a JSON body, returning None when it is not JSON."""
        try:
            return await response.json(content_type=None)
        except ValueError:
            return None

    async def search(self, query: str) -> list[SearchResult]:
        """Search the web.

        Args:
            query: Search query

        Returns:
            Search results in provider order
        """
        if not self.is_configured:
            raise ConfigurationError("Firecrawl API key not configured")

        session = await self._get_session()
        headers = {"Authorization": f"Bearer {self.api_key}"}
        payload = {"query": query, "limit": self.limit}

        try:
            async with session.post(
                f"{self.base_url}/search", json=payload, headers=headers
            ) as response:
                status = response.status
                body = await self._read_json(response)
        except TimeoutError as e:
            self.logger.error(f"Timeout searching Firecrawl for {query!r}")
            raise UpstreamFailure("Firecrawl search timed out") from e
        except aiohttp.ClientError as e:
            self.logger.error(f"Client error searching Firecrawl: {e}")
            raise UpstreamFailure("Firecrawl search failed") from e

        if not 200 <= status < 300:
            self.logger.error(f"Firecrawl API error: {status} {body}")
            error_text = body.get("error") if isinstance(body, dict) else None
            raise classify_search_failure(status, error_text, self.name)

        try:
            parsed = FirecrawlSearchResponse.model_validate(body if body is not None else {})
        except PydanticValidationError as e:
            self.logger.error(f"Malformed Firecrawl response: {e}")
            raise UpstreamFailure("Firecrawl returned a malformed response") from e

        if not parsed.success:
            self.logger.error(f"Firecrawl search unsuccessful: {parsed.error}")
            raise classify_search_failure(status, parsed.error, self.name)

        return [
            SearchResult(
                title=item.title or "",
                url=item.url,
                description=item.description,
                markdown=item.markdown,
            )
            for item in parsed.data
        ]

    async def research(self, query: str) -> ResearchResult:
        results = (await self.search(query))[:MAX_RESULTS]
        self.logger.info(f"Research complete: {len(results)} results")
        return ResearchResult(
            summary=summarize_results(results),
            query=query,
            citations=[r.url for r in results if r.url],
        )


class PerplexitySearchProvider(SearchProvider):
    """Research through Perplexity's answer-with-citations chat API."""

    name = "Perplexity"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str = "sonar",
        max_tokens: int = 200,
    ) -> None:
        """Initialize the Perplexity client."""
        super().__init__(api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.client = AsyncOpenAI(
            api_key=api_key or "unconfigured",
            base_url=base_url,
            max_retries=0,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()

    @staticmethod
    def _error_text(error: openai.APIStatusError) -> str | None:
        """Get the provider's error message from a status error body."""
        body = error.body
        if isinstance(body, dict):
            message = body.get("message")
            return message if isinstance(message, str) else str(body)
        if isinstance(body, str):
            return body
        return None

    async def research(self, query: str) -> ResearchResult:
        if not self.is_configured:
            raise ConfigurationError("Perplexity API key not configured")

        self.logger.info(f"Perplexity search query: {query}")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": PERPLEXITY_SYSTEM_PROMPT},
                    {"role": "user", "content": f"Research this topic for a story: {query}"},
                ],
                max_tokens=self.max_tokens,
            )
        except openai.APIStatusError as e:
            self.logger.error(f"Perplexity API error: {e.status_code} {e.body}")
            raise classify_search_failure(e.status_code, self._error_text(e), self.name) from e
        except openai.APIConnectionError as e:
            self.logger.error(f"Perplexity connection failed: {e}")
            raise UpstreamFailure("Perplexity search failed") from e

        if not response.choices:
            raise UpstreamFailure("Perplexity response contained no choices")

        summary = response.choices[0].message.content or NO_ANSWER_SUMMARY
        citations = (response.model_extra or {}).get("citations") or []

        self.logger.info("Perplexity research complete")
        return ResearchResult(
            summary=summary,
            query=query,
            citations=[c for c in citations if isinstance(c, str)],
        )
