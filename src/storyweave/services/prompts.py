"""Prompt templates for story continuation and writing feedback."""

import logging
from collections.abc import Iterable

from storyweave.domain.segment import Genre, StorySegment

logger = logging.getLogger(__name__)


GENRE_PROMPTS: dict[Genre, str] = {
    Genre.SCARY: (
        "You are a master horror writer. Create suspenseful, eerie, and thrilling "
        "story continuations that keep readers on edge. Use vivid, atmospheric "
        "descriptions and build tension."
    ),
    Genre.FUNNY: (
        "You are a comedic storyteller. Create humorous, witty, and entertaining "
        "story continuations with clever wordplay, unexpected twists, and "
        "laugh-out-loud moments."
    ),
    Genre.SCI_FI: (
        "You are a science fiction author. Create imaginative, thought-provoking "
        "story continuations with advanced technology, alien worlds, and "
        "futuristic concepts."
    ),
}

DEFAULT_GENRE = Genre.SCI_FI

CONTINUATION_PROMPT = """Continue this {genre} story with 2-3 engaging paragraphs \
that naturally flow from what came before. Make it creative and compelling:

{context}

Your continuation:"""

FEEDBACK_SYSTEM_PROMPT = (
    "You are an expert creative writing coach. Analyze the provided story segment "
    "and provide ONE brief, actionable suggestion in 1-2 sentences maximum. Focus "
    "on the most impactful improvement for narrative flow, character, imagery, or "
    "genre-specific elements."
)

FEEDBACK_PROMPT = """Genre: {genre}

Story segment to analyze:

{content}

Provide ONE brief suggestion (1-2 sentences max):"""


def select_system_prompt(genre: str | None) -> str:
    """Get the system prompt for a genre, falling back to sci-fi."""
    try:
        return GENRE_PROMPTS[Genre(genre)]
    except ValueError:
        logger.warning(f"Unknown genre {genre!r}, using {DEFAULT_GENRE.value} prompt")
        return GENRE_PROMPTS[DEFAULT_GENRE]


def build_story_context(segments: Iterable[StorySegment]) -> str:
    """Render segments as a tagged transcript in their given order."""
    return "\n\n".join(f"{seg.author_tag}: {seg.content}" for seg in segments)


def build_continuation_prompt(genre: str | None, segments: Iterable[StorySegment]) -> str:
    """Build the user prompt asking for the next 2-3 paragraphs."""
    return CONTINUATION_PROMPT.format(genre=genre, context=build_story_context(segments))


def build_feedback_prompt(genre: str | None, content: str) -> str:
    """Build the user prompt asking for one writing suggestion."""
    return FEEDBACK_PROMPT.format(genre=genre, content=content)
