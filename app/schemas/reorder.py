"""Pydantic schemas for reorder requests.

The wire bodies differ per entity (``{links: [...]}``, ``{sequence}``,
``{order}``); :data:`ReorderRequest` wraps them in one tagged union so the
dashboard client can treat every collection the same way.
"""

from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt

from app.services.reorder_engine import ReorderResult


class LinkOrderItem(BaseModel):
    """One link in an order update. Without ``order`` the array index is used."""

    id: UUID
    order: StrictInt | None = Field(None, ge=0)


class LinkOrderRequest(BaseModel):
    """Body of ``PUT /links/order``."""

    links: list[LinkOrderItem]


class LinkOrderUpdate(BaseModel):
    """A persisted link position."""

    id: UUID
    order: int
    title: str

    model_config = {"from_attributes": True}


class LinkOrderResponse(BaseModel):
    """Response of ``PUT /links/order``."""

    success: bool
    message: str
    updates: list[LinkOrderUpdate]


class NoticeSequenceUpdate(BaseModel):
    """Body of ``PUT /notices/{id}``."""

    sequence: StrictInt = Field(..., ge=0)


class DocumentOrderUpdate(BaseModel):
    """Body of ``PUT /documents/{id}``."""

    order: StrictInt = Field(..., ge=0)


class LinksReorder(BaseModel):
    """Full-list link order."""

    kind: Literal["links"] = "links"
    links: list[LinkOrderItem]

    @classmethod
    def from_result(cls, result: ReorderResult) -> "LinksReorder":
        # Always the full list so a later call supersedes an earlier one
        return cls(
            links=[
                LinkOrderItem(id=item_id, order=index)
                for index, item_id in enumerate(result.sequence)
            ]
        )

    def method(self) -> str:
        return "PUT"

    def path(self) -> str:
        return "/links/order"

    def body(self) -> dict:
        return LinkOrderRequest(links=self.links).model_dump(mode="json")


class NoticeReorder(BaseModel):
    """Single notice moved to a new index on its event's board."""

    kind: Literal["notice"] = "notice"
    notice_id: UUID
    sequence: int = Field(..., ge=0)

    @classmethod
    def from_result(cls, result: ReorderResult, moved_id: UUID) -> "NoticeReorder":
        return cls(notice_id=moved_id, sequence=result.sequence.index(moved_id))

    def method(self) -> str:
        return "PUT"

    def path(self) -> str:
        return f"/notices/{self.notice_id}"

    def body(self) -> dict:
        return NoticeSequenceUpdate(sequence=self.sequence).model_dump(mode="json")


class DocumentReorder(BaseModel):
    """Single document moved to a new index within its event or series."""

    kind: Literal["document"] = "document"
    document_id: UUID
    order: int = Field(..., ge=0)

    @classmethod
    def from_result(cls, result: ReorderResult, moved_id: UUID) -> "DocumentReorder":
        return cls(document_id=moved_id, order=result.sequence.index(moved_id))

    def method(self) -> str:
        return "PUT"

    def path(self) -> str:
        return f"/documents/{self.document_id}"

    def body(self) -> dict:
        return DocumentOrderUpdate(order=self.order).model_dump(mode="json")


ReorderRequest = Annotated[
    Union[LinksReorder, NoticeReorder, DocumentReorder],
    Field(discriminator="kind"),
]
