from app.schemas.auth import (
    UserCreate,
    UserLogin,
    UserResponse,
)
from app.schemas.link import (
    LinkCreate,
    LinkUpdate,
    LinkResponse,
    LinkPublicResponse,
)
from app.schemas.series import (
    SeriesCreate,
    SeriesUpdate,
    SeriesResponse,
)
from app.schemas.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    PublicEventResponse,
)
from app.schemas.notice import (
    NoticeCreate,
    NoticeResponse,
    NoticeSequenceItem,
    NoticeReorderRequest,
)
from app.schemas.document import (
    DocumentCreate,
    DocumentResponse,
)
from app.schemas.profile import ProfileUpdate, TimezoneSetting
from app.schemas.result import (
    ResultItem,
    ResultsReplace,
    EventResultResponse,
    EventResults,
)
from app.schemas.timeline import (
    TimelineSettings,
    TimelineSettingsUpdate,
    TimelineResponse,
    PostCreate,
    PostModeration,
    PostResponse,
    LikeSummary,
    CommentCreate,
    CommentResponse,
)
from app.schemas.reorder import (
    LinkOrderItem,
    LinkOrderRequest,
    LinkOrderUpdate,
    LinkOrderResponse,
    NoticeSequenceUpdate,
    DocumentOrderUpdate,
    LinksReorder,
    NoticeReorder,
    DocumentReorder,
    ReorderRequest,
)

__all__ = [
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "ProfileUpdate",
    "TimezoneSetting",
    # Profile
    "LinkCreate",
    "LinkUpdate",
    "LinkResponse",
    "LinkPublicResponse",
    # Club calendar
    "SeriesCreate",
    "SeriesUpdate",
    "SeriesResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "PublicEventResponse",
    "NoticeCreate",
    "NoticeResponse",
    "NoticeSequenceItem",
    "NoticeReorderRequest",
    "DocumentCreate",
    "DocumentResponse",
    # Results
    "ResultItem",
    "ResultsReplace",
    "EventResultResponse",
    "EventResults",
    # Race timeline
    "TimelineSettings",
    "TimelineSettingsUpdate",
    "TimelineResponse",
    "PostCreate",
    "PostModeration",
    "PostResponse",
    "LikeSummary",
    "CommentCreate",
    "CommentResponse",
    # Ordering
    "LinkOrderItem",
    "LinkOrderRequest",
    "LinkOrderUpdate",
    "LinkOrderResponse",
    "NoticeSequenceUpdate",
    "DocumentOrderUpdate",
    "LinksReorder",
    "NoticeReorder",
    "DocumentReorder",
    "ReorderRequest",
]
