"""Research service combining query extraction and web search."""

import logging

from storyweave.domain.research import ResearchResult
from storyweave.errors import ConfigurationError, ValidationError
from storyweave.research.base import QueryExtractor, SearchProvider

logger = logging.getLogger(__name__)


class ResearchService:
    """Finds short real-world research snippets for story content."""

    def __init__(self, extractor: QueryExtractor, provider: SearchProvider) -> None:
        """Initialize with the configured strategies."""
        self.extractor = extractor
        self.provider = provider

    async def research(self, content: str | None) -> ResearchResult:
        """Derive a query from content, search and summarize.

        Args:
            content: Story text to research

        Returns:
            ResearchResult with summary, query and citations
        """
        if not content or not isinstance(content, str) or not content.strip():
            raise ValidationError("Content is required")
        if not self.provider.is_configured:
            raise ConfigurationError(f"{self.provider.name} API key not configured")

        query = await self.extractor.extract(content)
        if not query:
            raise ValidationError("Content has no searchable words")

        return await self.provider.research(query)
