"""Race timeline routes: settings, feed, moderation, likes and comments."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, DBSession, OptionalUser
from app.models import TimelinePost, TimelinePostComment, User
from app.schemas.timeline import (
    CommentCreate,
    CommentResponse,
    LikeSummary,
    PostCreate,
    PostModeration,
    PostResponse,
    TimelineResponse,
    TimelineSettings,
    TimelineSettingsUpdate,
)
from app.services.timeline_service import (
    TimelineAccessError,
    TimelineNotFoundError,
    TimelineService,
)

router = APIRouter(prefix="/timeline/{event_id}", tags=["timeline"])


def timeline_error(e: ValueError) -> HTTPException:
    """HTTP error for a failed timeline operation."""
    if isinstance(e, TimelineNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, TimelineAccessError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


def post_response(post: TimelinePost, username: str) -> PostResponse:
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        author_username=username,
        content=post.content,
        media_url=post.media_url,
        media_type=post.media_type,
        is_approved=post.is_approved,
        created_at=post.created_at,
    )


def comment_response(comment: TimelinePostComment, username: str) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        user_id=comment.user_id,
        author_username=username,
        content=comment.content,
        created_at=comment.created_at,
    )


@router.get("/settings", response_model=TimelineSettings)
async def get_timeline_settings(
    event_id: UUID, current_user: CurrentUser, db: DBSession
) -> TimelineSettings:
    """Timeline settings of one of the current user's events."""
    timeline = await TimelineService(db).get_settings(event_id, current_user.id)
    if timeline is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return timeline


@router.put("/settings", response_model=TimelineSettings)
async def update_timeline_settings(
    event_id: UUID,
    data: TimelineSettingsUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> TimelineSettings:
    """Create or update the timeline of one of the current user's events."""
    timeline = await TimelineService(db).update_settings(event_id, data, current_user.id)
    if timeline is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return timeline


@router.get("", response_model=TimelineResponse)
async def get_timeline(event_id: UUID, viewer: OptionalUser, db: DBSession) -> TimelineResponse:
    """Timeline with the posts the caller may see, newest first."""
    try:
        event, timeline, posts = await TimelineService(db).get_feed(event_id, viewer)
    except ValueError as e:
        raise timeline_error(e)

    return TimelineResponse(
        **TimelineSettings.model_validate(timeline).model_dump(),
        event_id=event.id,
        event_title=event.title,
        posts=[post_response(post, username) for post, username in posts],
    )


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    event_id: UUID,
    data: PostCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> PostResponse:
    """Post to a timeline; held for approval when the timeline requires it."""
    try:
        post = await TimelineService(db).create_post(event_id, data, current_user)
    except ValueError as e:
        raise timeline_error(e)
    return post_response(post, current_user.username)


@router.put("/posts/{post_id}", response_model=PostResponse)
async def moderate_post(
    event_id: UUID,
    post_id: UUID,
    data: PostModeration,
    current_user: CurrentUser,
    db: DBSession,
) -> PostResponse:
    """Approve or reject a post; event owner only."""
    post = await TimelineService(db).moderate_post(
        event_id, post_id, data.action == "approve", current_user.id
    )
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    author = await db.get(User, post.user_id)
    return post_response(post, author.username if author else "")


@router.get("/posts/{post_id}/likes", response_model=LikeSummary)
async def get_likes(
    event_id: UUID, post_id: UUID, viewer: OptionalUser, db: DBSession
) -> LikeSummary:
    """Like count of a post and whether the caller liked it."""
    try:
        count, liked = await TimelineService(db).like_summary(event_id, post_id, viewer)
    except ValueError as e:
        raise timeline_error(e)
    return LikeSummary(count=count, user_liked=liked)


@router.post(
    "/posts/{post_id}/likes",
    response_model=LikeSummary,
    status_code=status.HTTP_201_CREATED,
)
async def like_post(
    event_id: UUID, post_id: UUID, current_user: CurrentUser, db: DBSession
) -> LikeSummary:
    """Like a post."""
    service = TimelineService(db)
    try:
        await service.like(event_id, post_id, current_user)
        count, liked = await service.like_summary(event_id, post_id, current_user)
    except ValueError as e:
        raise timeline_error(e)
    return LikeSummary(count=count, user_liked=liked)


@router.delete("/posts/{post_id}/likes", status_code=status.HTTP_204_NO_CONTENT)
async def unlike_post(
    event_id: UUID, post_id: UUID, current_user: CurrentUser, db: DBSession
) -> None:
    """Remove the current user's like."""
    try:
        removed = await TimelineService(db).unlike(event_id, post_id, current_user)
    except ValueError as e:
        raise timeline_error(e)
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Like not found")


@router.get("/posts/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    event_id: UUID, post_id: UUID, viewer: OptionalUser, db: DBSession
) -> list[CommentResponse]:
    """Comments of a post, newest first."""
    try:
        comments = await TimelineService(db).list_comments(event_id, post_id, viewer)
    except ValueError as e:
        raise timeline_error(e)
    return [comment_response(comment, username) for comment, username in comments]


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    event_id: UUID,
    post_id: UUID,
    data: CommentCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> CommentResponse:
    """Comment on a post."""
    try:
        comment = await TimelineService(db).add_comment(event_id, post_id, data.content, current_user)
    except ValueError as e:
        raise timeline_error(e)
    return comment_response(comment, current_user.username)
