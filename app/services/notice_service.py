"""Service for event notice operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Event, Notice
from app.schemas.notice import NoticeCreate, NoticeReorderRequest
from app.services.ordering import OrderingGateway, ScopeNotFoundError, notice_scope
from app.services.reorder_engine import PositionUpdate


class NoticeService:
    """Service for notice board CRUD and ordering."""

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

    async def create(self, data: NoticeCreate, user_id: UUID) -> Notice:
        """Create a notice at the end of the event's board."""
        await self._get_event(data.event_id, user_id)
        sequence = await self.ordering.next_position(notice_scope(data.event_id, user_id))

        notice = Notice(
            user_id=user_id,
            event_id=data.event_id,
            subject=data.subject,
            content=data.content,
            sequence=sequence,
        )
        self.db.add(notice)
        await self.db.flush()
        await self.db.refresh(notice)
        return notice

    async def get_by_id(self, notice_id: UUID, user_id: UUID) -> Notice | None:
        """Get a notice by ID if it belongs to user."""
        result = await self.db.execute(
            select(Notice).where(Notice.id == notice_id, Notice.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_event(self, event_id: UUID, user_id: UUID) -> list[Notice]:
        """Notices of an event in board order."""
        await self._get_event(event_id, user_id)
        return await self.ordering.load(notice_scope(event_id, user_id))

    async def move(self, notice_id: UUID, sequence: int, user_id: UUID) -> Notice | None:
        """Move a notice to ``sequence`` on its board, renumbering the rest."""
        notice = await self.get_by_id(notice_id, user_id)
        if not notice:
            return None

        await self.ordering.move_item(
            notice_scope(notice.event_id, user_id), notice.id, sequence
        )
        await self.db.refresh(notice)
        return notice

    async def reorder(self, request: NoticeReorderRequest, user_id: UUID) -> list[Notice]:
        """Apply explicit sequences to an event's notices, all-or-nothing."""
        await self._get_event(request.event_id, user_id)
        updates = [PositionUpdate(item.id, item.sequence) for item in request.notices]
        return await self.ordering.commit_order(
            notice_scope(request.event_id, user_id), updates
        )

    async def delete(self, notice_id: UUID, user_id: UUID) -> bool:
        """Delete a notice and close the gap it leaves."""
        notice = await self.get_by_id(notice_id, user_id)
        if not notice:
            return False

        event_id = notice.event_id
        await self.db.delete(notice)
        await self.db.flush()
        await self.ordering.close_gap(notice_scope(event_id, user_id))
        return True
