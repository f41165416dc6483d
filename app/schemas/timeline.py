"""Pydantic schemas for race timelines."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class TimelineSettings(BaseModel):
    """Timeline switches; a missing timeline reports the defaults."""

    is_active: bool = False
    require_approval: bool = True
    allow_public_viewing: bool = False
    allow_participant_posting: bool = True

    model_config = {"from_attributes": True}


class TimelineSettingsUpdate(BaseModel):
    """Partial settings update; omitted switches fall back to the defaults."""

    is_active: bool | None = None
    require_approval: bool | None = None
    allow_public_viewing: bool | None = None
    allow_participant_posting: bool | None = None


class PostCreate(BaseModel):
    """Schema for creating a timeline post."""

    content: str = Field(..., min_length=1, max_length=5000)
    media_url: str | None = Field(None, max_length=2048)
    media_type: str | None = Field(None, max_length=50)


class PostModeration(BaseModel):
    """Body of the moderation endpoint."""

    action: Literal["approve", "reject"]


class PostResponse(BaseModel):
    """Schema for a timeline post."""

    id: UUID
    user_id: UUID
    author_username: str
    content: str
    media_url: str | None
    media_type: str | None
    is_approved: bool
    created_at: datetime


class TimelineResponse(TimelineSettings):
    """A timeline with the posts visible to the caller."""

    event_id: UUID
    event_title: str
    posts: list[PostResponse]


class LikeSummary(BaseModel):
    """Like count of a post and whether the caller liked it."""

    count: int
    user_liked: bool


class CommentCreate(BaseModel):
    """Schema for commenting on a post."""

    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    """Schema for a comment."""

    id: UUID
    post_id: UUID
    user_id: UUID
    author_username: str
    content: str
    created_at: datetime
