"""Race result model."""

import uuid

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class EventResult(Base, UUIDMixin, TimestampMixin):
    """A published results document for an event, optionally per boat class."""

    __tablename__ = "event_results"

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date_range: Mapped[str] = mapped_column(String(100), nullable=False)
    document_url: Mapped[str] = mapped_column(String(2048), nullable=False)
    document_name: Mapped[str] = mapped_column(String(200), nullable=False, default="Results Document")
    boat_class: Mapped[str | None] = mapped_column(String(100), nullable=True)
