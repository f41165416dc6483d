"""Service for race timelines: settings, posts, moderation, likes and comments.

A timeline belongs to an event and is created the first time its owner
saves settings. Only active timelines can be read or posted to. Anonymous
visitors can read a timeline only when it allows public viewing, and
unapproved posts are shown to the event owner and the post's author only.
"""

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import (
    Event,
    RaceTimeline,
    TimelinePost,
    TimelinePostComment,
    TimelinePostLike,
    User,
)
from app.schemas.timeline import PostCreate, TimelineSettings, TimelineSettingsUpdate

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = TimelineSettings()


class TimelineNotFoundError(ValueError):
    """No such event, timeline or post."""


class TimelineAccessError(ValueError):
    """The timeline exists but the caller may not read or write it."""


class TimelineService:
    """Service for race timeline operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_event(self, event_id: UUID) -> Event:
        event = await self.db.get(Event, event_id)
        if not event:
            raise TimelineNotFoundError("Event not found")
        return event

    async def _get_timeline(self, event_id: UUID) -> RaceTimeline | None:
        result = await self.db.execute(
            select(RaceTimeline).where(RaceTimeline.event_id == event_id)
        )
        return result.scalar_one_or_none()

    async def _readable_timeline(
        self, event_id: UUID, viewer: User | None
    ) -> tuple[Event, RaceTimeline]:
        event = await self._get_event(event_id)
        timeline = await self._get_timeline(event_id)
        if not timeline:
            raise TimelineNotFoundError("Timeline not found")
        if not timeline.is_active:
            raise TimelineAccessError("Timeline is not active")
        if viewer is None and not timeline.allow_public_viewing:
            raise TimelineAccessError("Sign in to view this timeline")
        return event, timeline

    @staticmethod
    def _can_see(post: TimelinePost, event: Event, viewer: User | None) -> bool:
        if post.is_approved:
            return True
        return viewer is not None and viewer.id in (event.user_id, post.user_id)

    async def get_settings(self, event_id: UUID, user_id: UUID) -> TimelineSettings | None:
        """Settings of one of the user's events, defaults when never saved."""
        event = await self.db.get(Event, event_id)
        if not event or event.user_id != user_id:
            return None
        timeline = await self._get_timeline(event_id)
        if not timeline:
            return DEFAULT_SETTINGS
        return TimelineSettings.model_validate(timeline)

    async def update_settings(
        self, event_id: UUID, data: TimelineSettingsUpdate, user_id: UUID
    ) -> TimelineSettings | None:
        """Create or update the timeline of one of the user's events."""
        event = await self.db.get(Event, event_id)
        if not event or event.user_id != user_id:
            return None

        values = {
            field: value if value is not None else getattr(DEFAULT_SETTINGS, field)
            for field, value in data.model_dump().items()
        }
        timeline = await self._get_timeline(event_id)
        if timeline:
            for field, value in values.items():
                setattr(timeline, field, value)
        else:
            timeline = RaceTimeline(event_id=event_id, **values)
            self.db.add(timeline)
        await self.db.flush()
        await self.db.refresh(timeline)
        return TimelineSettings.model_validate(timeline)

    async def get_feed(
        self, event_id: UUID, viewer: User | None
    ) -> tuple[Event, RaceTimeline, list[tuple[TimelinePost, str]]]:
        """Timeline with the posts visible to ``viewer``, newest first."""
        event, timeline = await self._readable_timeline(event_id, viewer)
        result = await self.db.execute(
            select(TimelinePost, User.username)
            .join(User, User.id == TimelinePost.user_id)
            .where(TimelinePost.timeline_id == timeline.id)
            .order_by(TimelinePost.created_at.desc(), TimelinePost.id)
        )
        posts = [
            (post, username)
            for post, username in result.all()
            if self._can_see(post, event, viewer)
        ]
        return event, timeline, posts

    async def create_post(self, event_id: UUID, data: PostCreate, author: User) -> TimelinePost:
        """Post to a timeline; auto-approved for the owner or when approval is off."""
        event, timeline = await self._readable_timeline(event_id, author)
        is_owner = event.user_id == author.id
        if not timeline.allow_participant_posting and not is_owner:
            raise TimelineAccessError("Posting is not allowed in this timeline")

        post = TimelinePost(
            timeline_id=timeline.id,
            user_id=author.id,
            content=data.content,
            media_url=data.media_url,
            media_type=data.media_type,
            is_approved=is_owner or not timeline.require_approval,
        )
        self.db.add(post)
        await self.db.flush()
        await self.db.refresh(post)
        return post

    async def moderate_post(
        self, event_id: UUID, post_id: UUID, approve: bool, user_id: UUID
    ) -> TimelinePost | None:
        """Approve or hide a post on one of the user's timelines."""
        event = await self.db.get(Event, event_id)
        if not event or event.user_id != user_id:
            return None
        timeline = await self._get_timeline(event_id)
        if not timeline:
            return None
        post = await self.db.get(TimelinePost, post_id)
        if not post or post.timeline_id != timeline.id:
            return None

        post.is_approved = approve
        await self.db.flush()
        await self.db.refresh(post)
        logger.info("Post %s %s", post_id, "approved" if approve else "rejected")
        return post

    async def _visible_post(
        self, event_id: UUID, post_id: UUID, viewer: User | None
    ) -> TimelinePost:
        event, timeline = await self._readable_timeline(event_id, viewer)
        post = await self.db.get(TimelinePost, post_id)
        if not post or post.timeline_id != timeline.id or not self._can_see(post, event, viewer):
            raise TimelineNotFoundError("Post not found")
        return post

    async def like_summary(
        self, event_id: UUID, post_id: UUID, viewer: User | None
    ) -> tuple[int, bool]:
        """Like count of a post and whether ``viewer`` liked it."""
        await self._visible_post(event_id, post_id, viewer)
        count = await self.db.scalar(
            select(func.count()).select_from(TimelinePostLike).where(TimelinePostLike.post_id == post_id)
        )
        liked = False
        if viewer is not None:
            liked = (
                await self.db.scalar(
                    select(TimelinePostLike.id).where(
                        TimelinePostLike.post_id == post_id,
                        TimelinePostLike.user_id == viewer.id,
                    )
                )
            ) is not None
        return count or 0, liked

    async def like(self, event_id: UUID, post_id: UUID, user: User) -> TimelinePostLike:
        """Like a post once; a second like is rejected."""
        await self._visible_post(event_id, post_id, user)
        existing = await self.db.scalar(
            select(TimelinePostLike.id).where(
                TimelinePostLike.post_id == post_id,
                TimelinePostLike.user_id == user.id,
            )
        )
        if existing is not None:
            raise ValueError("Post already liked")

        like = TimelinePostLike(post_id=post_id, user_id=user.id)
        self.db.add(like)
        await self.db.flush()
        await self.db.refresh(like)
        return like

    async def unlike(self, event_id: UUID, post_id: UUID, user: User) -> bool:
        """Remove the user's like; False when there was none."""
        await self._visible_post(event_id, post_id, user)
        result = await self.db.execute(
            delete(TimelinePostLike).where(
                TimelinePostLike.post_id == post_id,
                TimelinePostLike.user_id == user.id,
            )
        )
        return result.rowcount > 0

    async def list_comments(
        self, event_id: UUID, post_id: UUID, viewer: User | None
    ) -> list[tuple[TimelinePostComment, str]]:
        """Comments of a post with their authors, newest first."""
        await self._visible_post(event_id, post_id, viewer)
        result = await self.db.execute(
            select(TimelinePostComment, User.username)
            .join(User, User.id == TimelinePostComment.user_id)
            .where(TimelinePostComment.post_id == post_id)
            .order_by(TimelinePostComment.created_at.desc(), TimelinePostComment.id)
        )
        return [(comment, username) for comment, username in result.all()]

    async def add_comment(
        self, event_id: UUID, post_id: UUID, content: str, user: User
    ) -> TimelinePostComment:
        """Comment on a post."""
        await self._visible_post(event_id, post_id, user)
        comment = TimelinePostComment(post_id=post_id, user_id=user.id, content=content)
        self.db.add(comment)
        await self.db.flush()
        await self.db.refresh(comment)
        return comment

    async def delete_for_event(self, event_id: UUID) -> None:
        """Remove an event's timeline with its posts, likes and comments."""
        timeline_ids = select(RaceTimeline.id).where(RaceTimeline.event_id == event_id)
        post_ids = select(TimelinePost.id).where(TimelinePost.timeline_id.in_(timeline_ids))
        await self.db.execute(delete(TimelinePostLike).where(TimelinePostLike.post_id.in_(post_ids)))
        await self.db.execute(
            delete(TimelinePostComment).where(TimelinePostComment.post_id.in_(post_ids))
        )
        await self.db.execute(delete(TimelinePost).where(TimelinePost.timeline_id.in_(timeline_ids)))
        await self.db.execute(delete(RaceTimeline).where(RaceTimeline.event_id == event_id))
