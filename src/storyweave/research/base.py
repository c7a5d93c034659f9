"""Base interfaces for research query extraction and web search."""

import logging
from abc import ABC, abstractmethod

from storyweave.domain.research import ResearchResult


class QueryExtractor(ABC):
    """Derives a short web search query from story content."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def extract(self, content: str) -> str:
        """Derive a search query.

        Args:
            content: Story text to research

        Returns:
            Search query; may be empty if nothing searchable remains
        """
        pass


class SearchProvider(ABC):
    """Searches the web for a query and summarizes the findings."""

    name: str = "Search"

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_configured(self) -> bool:
        """Check whether the provider credential is set."""
        return bool(self.api_key)

    @abstractmethod
    async def research(self, query: str) -> ResearchResult:
        """Run one search and return a summary.

        Args:
            query: Search query

        Returns:
            ResearchResult with summary, query and citations
        """
        pass

    async def close(self) -> None:
        """Release provider resources."""
        return None
