"""Service for event and series document operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Document, Event, Series
from app.schemas.document import DocumentCreate
from app.services.ordering import OrderingGateway, ScopeNotFoundError, document_scope


class DocumentService:
    """Service for document CRUD and ordering.

    Event documents and series documents are ordered independently; an
    event's listing shows its series' documents first.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.ordering = OrderingGateway(db)

    async def _get_event(self, event_id: UUID, user_id: UUID) -> Event:
        result = await self.db.execute(
            select(Event).where(Event.id == event_id, Event.user_id == user_id)
        )
        event = result.scalar_one_or_none()
        if not event:
            raise ScopeNotFoundError("Event not found")
        return event

    async def _check_series(self, series_id: UUID, user_id: UUID) -> None:
        result = await self.db.execute(
            select(Series.id).where(Series.id == series_id, Series.user_id == user_id)
        )
        if result.scalar_one_or_none() is None:
            raise ScopeNotFoundError("Series not found")

    async def create(self, data: DocumentCreate, user_id: UUID) -> Document:
        """Create a document at the end of its event or series."""
        if data.event_id is not None:
            await self._get_event(data.event_id, user_id)
        else:
            await self._check_series(data.series_id, user_id)

        scope = document_scope(user_id, event_id=data.event_id, series_id=data.series_id)
        document = Document(
            user_id=user_id,
            event_id=data.event_id,
            series_id=data.series_id,
            name=data.name,
            url=data.url,
            type=data.type,
            order=await self.ordering.next_position(scope),
        )
        self.db.add(document)
        await self.db.flush()
        await self.db.refresh(document)
        return document

    async def get_by_id(self, document_id: UUID, user_id: UUID) -> Document | None:
        """Get a document by ID if it belongs to user."""
        result = await self.db.execute(
            select(Document).where(Document.id == document_id, Document.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_event(self, event_id: UUID, user_id: UUID) -> list[Document]:
        """Series documents of the event's series, then the event's own documents."""
        event = await self._get_event(event_id, user_id)
        documents = []
        if event.series_id is not None:
            documents.extend(
                await self.ordering.load(document_scope(user_id, series_id=event.series_id))
            )
        documents.extend(await self.ordering.load(document_scope(user_id, event_id=event_id)))
        return documents

    async def list_for_series(self, series_id: UUID, user_id: UUID) -> list[Document]:
        """Documents of a series in order."""
        await self._check_series(series_id, user_id)
        return await self.ordering.load(document_scope(user_id, series_id=series_id))

    async def move(self, document_id: UUID, order: int, user_id: UUID) -> Document | None:
        """Move a document to ``order`` within its scope, renumbering the rest."""
        document = await self.get_by_id(document_id, user_id)
        if not document:
            return None

        scope = document_scope(user_id, event_id=document.event_id, series_id=document.series_id)
        await self.ordering.move_item(scope, document.id, order)
        await self.db.refresh(document)
        return document

    async def delete(self, document_id: UUID, user_id: UUID) -> bool:
        """Delete a document and close the gap it leaves."""
        document = await self.get_by_id(document_id, user_id)
        if not document:
            return False

        scope = document_scope(user_id, event_id=document.event_id, series_id=document.series_id)
        await self.db.delete(document)
        await self.db.flush()
        await self.ordering.close_gap(scope)
        return True
