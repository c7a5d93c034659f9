"""Research strategies: query extraction and web search."""

from storyweave.config import Settings
from storyweave.infrastructure.ai_client import AIClient
from storyweave.research.base import QueryExtractor, SearchProvider
from storyweave.research.providers import FirecrawlSearchProvider, PerplexitySearchProvider
from storyweave.research.query_extractor import (
    AIQueryExtractor,
    NaiveQueryExtractor,
    naive_search_query,
)
from storyweave.research.summary import NO_RESULTS_SUMMARY, summarize_results


def build_query_extractor(settings: Settings, ai_client: AIClient) -> QueryExtractor:
    """Create the query extractor selected by configuration."""
    if settings.query_extractor == "ai":
        return AIQueryExtractor(ai_client)
    return NaiveQueryExtractor()


def build_search_provider(settings: Settings) -> SearchProvider:
    """Create the search provider selected by configuration."""
    if settings.search_provider == "perplexity":
        return PerplexitySearchProvider(
            api_key=settings.perplexity_api_key,
            base_url=settings.perplexity_base_url,
            model=settings.perplexity_model,
        )
    return FirecrawlSearchProvider(
        api_key=settings.firecrawl_api_key,
        base_url=settings.firecrawl_base_url,
        limit=settings.search_result_limit,
        timeout_seconds=settings.search_timeout_seconds,
    )


__all__ = [
    "QueryExtractor",
    "SearchProvider",
    "NaiveQueryExtractor",
    "AIQueryExtractor",
    "FirecrawlSearchProvider",
    "PerplexitySearchProvider",
    "naive_search_query",
    "summarize_results",
    "NO_RESULTS_SUMMARY",
    "build_query_extractor",
    "build_search_provider",
]
