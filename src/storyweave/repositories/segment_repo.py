"""Segment repository for database reads."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storyweave.domain.segment import FeedbackContext, StorySegment
from storyweave.infrastructure.models import StoryModel, StorySegmentModel


class SegmentRepository:
    """Read-only access to story segments."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get_feedback_context(self, segment_id: str) -> FeedbackContext | None:
        """Get a segment's content joined with its parent story's genre."""
        stmt = (
            select(StorySegmentModel.content, StoryModel.genre)
            .join(StoryModel, StorySegmentModel.story_id == StoryModel.id)
            .where(StorySegmentModel.id == segment_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return FeedbackContext(segment_id=segment_id, content=row.content, genre=row.genre)

    async def list_for_story(self, story_id: str) -> list[StorySegment]:
        """List a story's segments in sequence order."""
        stmt = (
            select(StorySegmentModel)
            .where(StorySegmentModel.story_id == story_id)
            .order_by(StorySegmentModel.sequence_order)
        )
        result = await self.session.execute(stmt)
        return [
            StorySegment(
                id=model.id,
                story_id=model.story_id,
                content=model.content,
                is_ai_generated=model.is_ai_generated,
                sequence_order=model.sequence_order,
            )
            for model in result.scalars().all()
        ]
