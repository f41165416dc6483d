"""Pydantic schemas for profile links."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.link import LinkType, SocialPlatform


class LinkCreate(BaseModel):
    """Schema for creating a link."""

    title: str = Field(..., min_length=1, max_length=100)
    url: str | None = Field(None, min_length=1, max_length=2048)
    type: LinkType = LinkType.LINK
    platform: SocialPlatform | None = None
    is_public: bool = True

    @model_validator(mode="after")
    def check_url_and_platform(self) -> "LinkCreate":
        """Calendar links need no URL, every other type does."""
        if self.type != LinkType.CALENDAR and not self.url:
            raise ValueError("URL is required")
        if self.type == LinkType.SOCIAL and self.platform is None:
            raise ValueError("Social links require a platform")
        return self


class LinkUpdate(BaseModel):
    """Schema for updating a link."""

    title: str | None = Field(None, min_length=1, max_length=100)
    url: str | None = Field(None, min_length=1, max_length=2048)
    type: LinkType | None = None
    platform: SocialPlatform | None = None
    is_public: bool | None = None

    @field_validator("title", "url", "type", "is_public")
    @classmethod
    def not_null(cls, value):
        """Omit a field to keep it; only ``platform`` may be cleared."""
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class LinkResponse(BaseModel):
    """Schema for link response."""

    id: UUID
    user_id: UUID
    title: str
    url: str
    type: LinkType
    platform: SocialPlatform | None
    is_public: bool
    order: int
    created_at: datetime

    model_config = {"from_attributes": True}


class LinkPublicResponse(BaseModel):
    """Schema for public link response."""

    id: UUID
    title: str
    url: str
    type: LinkType
    platform: SocialPlatform | None

    model_config = {"from_attributes": True}
