"""Pydantic schemas for race results."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ResultItem(BaseModel):
    """One results document in a replace request."""

    date_range: str = Field(..., min_length=1, max_length=100)
    document_url: str = Field(..., min_length=1, max_length=2048)
    document_name: str = Field("Results Document", min_length=1, max_length=200)
    boat_class: str | None = Field(None, max_length=100)


class ResultsReplace(BaseModel):
    """Body of ``PUT /events/{id}/results``; replaces every result of the event."""

    results: list[ResultItem]


class EventResultResponse(BaseModel):
    """Schema for a stored result."""

    id: UUID
    event_id: UUID
    date_range: str
    document_url: str
    document_name: str
    boat_class: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ResultLink(BaseModel):
    """A result as listed under its event."""

    id: UUID
    url: str
    date_range: str
    boat_class: str | None


class EventResults(BaseModel):
    """An event with its results, for the results page."""

    id: UUID
    name: str
    date: str
    results: list[ResultLink]
