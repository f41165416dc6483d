"""Race timeline models: per-event feed with posts, likes and comments."""

import uuid

from sqlalchemy import Boolean, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class RaceTimeline(Base, UUIDMixin, TimestampMixin):
    """Feed settings for one event. Created on first settings update."""

    __tablename__ = "race_timelines"

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    require_approval: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    allow_public_viewing: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    allow_participant_posting: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class TimelinePost(Base, UUIDMixin, TimestampMixin):
    """A post on a race timeline. Unapproved posts are visible to the event owner and the author."""

    __tablename__ = "timeline_posts"

    timeline_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("race_timelines.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    media_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    media_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class TimelinePostLike(Base, UUIDMixin, TimestampMixin):
    """One user's like of a post."""

    __tablename__ = "timeline_post_likes"
    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_timeline_post_likes_post_user"),)

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("timeline_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


class TimelinePostComment(Base, UUIDMixin, TimestampMixin):
    """A comment on a post."""

    __tablename__ = "timeline_post_comments"

    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("timeline_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
