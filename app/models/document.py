"""Event and series document model."""

import enum
import uuid

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class DocumentType(str, enum.Enum):
    """Document type enum."""

    LINK = "link"
    EVENT = "event"
    SERIES = "series"


class Document(Base, UUIDMixin, TimestampMixin):
    """A document attached to exactly one event or one series."""

    __tablename__ = "documents"
    __table_args__ = (
        CheckConstraint(
            "(event_id IS NULL) <> (series_id IS NULL)",
            name="ck_documents_single_scope",
        ),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    series_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("series.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    type: Mapped[DocumentType] = mapped_column(
        Enum(DocumentType, name="document_type_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=DocumentType.LINK,
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
