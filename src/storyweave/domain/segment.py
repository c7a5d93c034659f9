"""Story segment domain entities."""

from dataclasses import dataclass
from enum import StrEnum


class Genre(StrEnum):
    """Story genres with a dedicated writing prompt."""

    SCARY = "scary"
    FUNNY = "funny"
    SCI_FI = "sci-fi"


@dataclass
class StorySegment:
    """One unit of story text, written by a user or the AI."""

    id: str | None
    story_id: str | None
    content: str
    is_ai_generated: bool = False
    sequence_order: int = 0

    @property
    def author_tag(self) -> str:
        """Transcript tag for the segment's author."""
        return "[AI]" if self.is_ai_generated else "[User]"


@dataclass
class FeedbackContext:
    """A stored segment together with its parent story's genre."""

    segment_id: str
    content: str
    genre: str | None
