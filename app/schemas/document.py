"""Pydantic schemas for event and series documents."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.document import DocumentType


class DocumentCreate(BaseModel):
    """Schema for creating a document. New documents go to the end of their scope."""

    name: str = Field(..., min_length=1, max_length=200)
    url: str = Field(..., min_length=1, max_length=2048)
    type: DocumentType = DocumentType.LINK
    event_id: UUID | None = None
    series_id: UUID | None = None

    @model_validator(mode="after")
    def check_single_scope(self) -> "DocumentCreate":
        """A document belongs to exactly one event or one series."""
        if (self.event_id is None) == (self.series_id is None):
            raise ValueError("Either event_id or series_id must be provided")
        self.name = self.name.strip()
        return self


class DocumentResponse(BaseModel):
    """Schema for document response."""

    id: UUID
    event_id: UUID | None
    series_id: UUID | None
    name: str
    url: str
    type: DocumentType
    order: int
    created_at: datetime

    model_config = {"from_attributes": True}
