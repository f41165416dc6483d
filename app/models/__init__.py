from app.models.base import Base
from app.models.user import User, RESERVED_USERNAMES
from app.models.link import Link, LinkType, SocialPlatform, CALENDAR_URL
from app.models.series import Series
from app.models.event import Event
from app.models.notice import Notice
from app.models.document import Document, DocumentType
from app.models.result import EventResult
from app.models.timeline import (
    RaceTimeline,
    TimelinePost,
    TimelinePostComment,
    TimelinePostLike,
)

__all__ = [
    "Base",
    "User",
    "RESERVED_USERNAMES",
    # Profile
    "Link",
    "LinkType",
    "SocialPlatform",
    "CALENDAR_URL",
    # Club calendar
    "Series",
    "Event",
    "Notice",
    "Document",
    "DocumentType",
    "EventResult",
    # Race timeline
    "RaceTimeline",
    "TimelinePost",
    "TimelinePostComment",
    "TimelinePostLike",
]
