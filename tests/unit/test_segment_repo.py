"""Tests for SegmentRepository against an in-memory database."""

import pytest

from storyweave.infrastructure.models import StoryModel, StorySegmentModel
from storyweave.repositories.segment_repo import SegmentRepository


@pytest.fixture
async def seeded_session(test_session):
    """Session with one story and three segments inserted out of order."""
    test_session.add(StoryModel(id="story-1", title="Red Dust", genre="sci-fi", user_id="u1"))
    test_session.add_all([
        StorySegmentModel(
            id="seg-2", story_id="story-1", content="Its sensors found no one.",
            is_ai_generated=True, sequence_order=1,
        ),
        StorySegmentModel(
            id="seg-1", story_id="story-1", content="The robot awoke in a dust-covered lab.",
            is_ai_generated=False, sequence_order=0,
        ),
        StorySegmentModel(
            id="seg-3", story_id="story-1", content="It walked outside.",
            is_ai_generated=False, sequence_order=2,
        ),
    ])
    await test_session.commit()
    return test_session


class TestGetFeedbackContext:
    """Tests for the segment -> story genre lookup."""

    @pytest.mark.asyncio
    async def test_found(self, seeded_session):
        repo = SegmentRepository(seeded_session)

        context = await repo.get_feedback_context("seg-1")

        assert context is not None
        assert context.segment_id == "seg-1"
        assert context.content == "The robot awoke in a dust-covered lab."
        assert context.genre == "sci-fi"

    @pytest.mark.asyncio
    async def test_missing(self, seeded_session):
        repo = SegmentRepository(seeded_session)
        assert await repo.get_feedback_context("nope") is None


class TestListForStory:
    """Tests for ordered segment listing."""

    @pytest.mark.asyncio
    async def test_sequence_order(self, seeded_session):
        repo = SegmentRepository(seeded_session)

        segments = await repo.list_for_story("story-1")

        assert [s.id for s in segments] == ["seg-1", "seg-2", "seg-3"]
        assert [s.author_tag for s in segments] == ["[User]", "[AI]", "[User]"]

    @pytest.mark.asyncio
    async def test_unknown_story(self, seeded_session):
        repo = SegmentRepository(seeded_session)
        assert await repo.list_for_story("other") == []
