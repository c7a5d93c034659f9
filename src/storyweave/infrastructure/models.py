"""SQLAlchemy ORM models.

The managed database owns these tables; migrations/ recreates them locally.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class StoryModel(Base):
    """SQLAlchemy model for stories table."""

    __tablename__ = "stories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    genre: Mapped[str] = mapped_column(String(20), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    segments: Mapped[list["StorySegmentModel"]] = relationship(
        back_populates="story",
        order_by="StorySegmentModel.sequence_order",
    )


class StorySegmentModel(Base):
    """SQLAlchemy model for story_segments table."""

    __tablename__ = "story_segments"
    __table_args__ = (
        Index("ix_story_segments_story_order", "story_id", "sequence_order"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    story_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("stories.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_ai_generated: Mapped[bool] = mapped_column(Boolean, default=False)
    sequence_order: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    story: Mapped[StoryModel] = relationship(back_populates="segments")
