"""Pydantic schemas for event notices."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt


class NoticeCreate(BaseModel):
    """Schema for creating a notice. New notices go to the end of the board."""

    event_id: UUID
    subject: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class NoticeResponse(BaseModel):
    """Schema for notice response."""

    id: UUID
    event_id: UUID
    subject: str
    content: str
    sequence: int
    created_at: datetime

    model_config = {"from_attributes": True}


class NoticeSequenceItem(BaseModel):
    """Schema for a single item in a bulk notice reorder."""

    id: UUID
    sequence: StrictInt = Field(..., ge=0)


class NoticeReorderRequest(BaseModel):
    """Schema for reordering all notices of one event."""

    event_id: UUID
    notices: list[NoticeSequenceItem]
