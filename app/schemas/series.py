"""Pydantic schemas for event series."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class SeriesCreate(BaseModel):
    """Schema for creating a series."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    start_date: datetime | None = None


class SeriesUpdate(BaseModel):
    """Schema for updating a series."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    start_date: datetime | None = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value):
        if value is None:
            raise ValueError("Title cannot be null")
        return value


class SeriesResponse(BaseModel):
    """Schema for series response."""

    id: UUID
    title: str
    description: str | None
    start_date: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}
