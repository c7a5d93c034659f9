"""Query extraction strategies for research."""

import re

from storyweave.errors import EmptyCompletion, ExtractionError
from storyweave.infrastructure.ai_client import AIClient
from storyweave.research.base import QueryExtractor

MAX_CONTENT_CHARS = 200
MAX_QUERY_WORDS = 8

# ASCII so that only [A-Za-z0-9_] survive as word characters
_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")

EXTRACTION_SYSTEM_PROMPT = (
    "You extract search topics from fiction. Reply with a 3-6 word web search "
    "query naming the real-world topic of the passage. Reply with the query only."
)


def naive_search_query(content: str) -> str:
    """Derive a search query offline from the start of the content.

    Keeps the first 200 characters, replaces non-word characters with spaces,
    collapses whitespace and keeps the first 8 words. Case is preserved.
    """
    cleaned = _NON_WORD.sub(" ", content[:MAX_CONTENT_CHARS])
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()
    if not cleaned:
        return ""
    return " ".join(cleaned.split(" ")[:MAX_QUERY_WORDS])


class NaiveQueryExtractor(QueryExtractor):
    """Deterministic truncate-and-tokenize extraction."""

    async def extract(self, content: str) -> str:
        query = naive_search_query(content)
        self.logger.info(f"Search query: {query}")
        return query


class AIQueryExtractor(QueryExtractor):
    """Asks the AI gateway for a short topic query."""

    def __init__(self, ai_client: AIClient) -> None:
        super().__init__()
        self.ai = ai_client

    async def extract(self, content: str) -> str:
        try:
            answer = await self.ai.complete(
                system_prompt=EXTRACTION_SYSTEM_PROMPT,
                user_prompt=content[:2000],
                max_tokens=30,
            )
        except EmptyCompletion as e:
            raise ExtractionError("Failed to extract a search query from the content") from e
        query = answer.strip().strip("\"'").strip()
        if not query:
            raise ExtractionError("Failed to extract a search query from the content")
        self.logger.info(f"AI search query: {query}")
        return query
