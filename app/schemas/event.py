"""Pydantic schemas for club events."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class EventCreate(BaseModel):
    """Schema for creating an event."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    location: str = Field(..., min_length=1, max_length=200)
    event_type: str = Field(..., min_length=1, max_length=50)
    boat_classes: list[str] = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime | None = None
    series_id: UUID | None = None

    @model_validator(mode="after")
    def default_end_date(self) -> "EventCreate":
        """Single-day events end on their start date."""
        if self.end_date is None:
            self.end_date = self.start_date
        if self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self


class EventUpdate(BaseModel):
    """Schema for updating an event."""

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    location: str | None = Field(None, min_length=1, max_length=200)
    event_type: str | None = Field(None, min_length=1, max_length=50)
    boat_classes: list[str] | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    series_id: UUID | None = None

    @field_validator("title", "location", "event_type", "boat_classes", "start_date", "end_date")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class EventResponse(BaseModel):
    """Schema for event response."""

    id: UUID
    series_id: UUID | None
    title: str
    description: str | None
    location: str
    event_type: str
    boat_classes: list[str]
    start_date: datetime
    end_date: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class PublicNotice(BaseModel):
    """Notice as shown on the public calendar."""

    id: UUID
    subject: str
    content: str
    sequence: int

    model_config = {"from_attributes": True}


class PublicDocument(BaseModel):
    """Document as shown on the public calendar."""

    id: UUID
    name: str
    url: str
    order: int

    model_config = {"from_attributes": True}


class PublicEventResponse(EventResponse):
    """Event on a public calendar with its board and documents in order."""

    series_title: str | None = None
    notices: list[PublicNotice] = []
    documents: list[PublicDocument] = []
