"""Research domain entities."""

from dataclasses import dataclass, field


@dataclass
class SearchResult:
    """A single web search hit."""

    title: str
    url: str | None = None
    description: str | None = None
    markdown: str | None = None

    @property
    def snippet(self) -> str:
        """Description, or the start of the page body when there is none."""
        return self.description or (self.markdown or "")[:150]


@dataclass
class ResearchResult:
    """Summarized research for a piece of story content."""

    summary: str
    query: str
    citations: list[str] = field(default_factory=list)
