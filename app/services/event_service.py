"""Service for club event operations."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import String, cast, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Document, Event, EventResult, Notice, Series, User
from app.schemas.event import (
    EventCreate,
    EventResponse,
    EventUpdate,
    PublicDocument,
    PublicEventResponse,
    PublicNotice,
)
from app.services.timeline_service import TimelineService

# Window of the public calendar around today
PUBLIC_PAST_DAYS = 30
PUBLIC_FUTURE_DAYS = 365


def _as_utc(value: datetime) -> datetime:
    """Comparable UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventService:
    """Service for event CRUD operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _check_series(self, series_id: UUID | None, user_id: UUID) -> None:
        if series_id is None:
            return
        result = await self.db.execute(
            select(Series.id).where(Series.id == series_id, Series.user_id == user_id)
        )
        if result.scalar_one_or_none() is None:
            raise ValueError("Series not found")

    async def create(self, data: EventCreate, user_id: UUID) -> Event:
        """Create a new event, optionally inside one of the user's series."""
        await self._check_series(data.series_id, user_id)

        event = Event(user_id=user_id, **data.model_dump())
        self.db.add(event)
        await self.db.flush()
        await self.db.refresh(event)
        return event

    async def get_by_id(self, event_id: UUID, user_id: UUID) -> Event | None:
        """Get an event by ID if it belongs to user."""
        result = await self.db.execute(
            select(Event).where(Event.id == event_id, Event.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[Event]:
        """List a user's events by start date."""
        result = await self.db.execute(
            select(Event)
            .where(Event.user_id == user_id)
            .order_by(Event.start_date)
        )
        return list(result.scalars().all())

    async def search(self, user_id: UUID, query: str) -> list[Event]:
        """The user's events matching ``query`` in any text field or series title."""
        pattern = f"%{query}%"
        result = await self.db.execute(
            select(Event)
            .outerjoin(Series, Series.id == Event.series_id)
            .where(
                Event.user_id == user_id,
                or_(
                    Event.title.ilike(pattern),
                    Event.description.ilike(pattern),
                    Event.location.ilike(pattern),
                    Event.event_type.ilike(pattern),
                    cast(Event.boat_classes, String).ilike(pattern),
                    Series.title.ilike(pattern),
                ),
            )
            .order_by(Event.start_date)
        )
        return list(result.scalars().all())

    async def list_public(self, username: str) -> list[PublicEventResponse] | None:
        """Public calendar of a profile, or None if the profile does not exist.

        Covers events starting from a month ago to a year ahead, each with its
        notice board and documents (series documents first) in order.
        """
        result = await self.db.execute(
            select(User.id).where(User.username == username, User.is_active.is_(True))
        )
        user_id = result.scalar_one_or_none()
        if user_id is None:
            return None

        now = datetime.now(timezone.utc)
        result = await self.db.execute(
            select(Event, Series.title)
            .outerjoin(Series, Series.id == Event.series_id)
            .where(
                Event.user_id == user_id,
                Event.start_date >= now - timedelta(days=PUBLIC_PAST_DAYS),
                Event.start_date <= now + timedelta(days=PUBLIC_FUTURE_DAYS),
            )
            .order_by(Event.start_date)
        )
        rows = result.all()
        if not rows:
            return []

        event_ids = [event.id for event, _ in rows]
        series_ids = {event.series_id for event, _ in rows if event.series_id is not None}

        notices: dict[UUID, list[Notice]] = {event_id: [] for event_id in event_ids}
        result = await self.db.execute(
            select(Notice).where(Notice.event_id.in_(event_ids)).order_by(Notice.sequence)
        )
        for notice in result.scalars().all():
            notices[notice.event_id].append(notice)

        documents: dict[UUID, list[Document]] = {}
        result = await self.db.execute(
            select(Document)
            .where(or_(Document.event_id.in_(event_ids), Document.series_id.in_(list(series_ids))))
            .order_by(Document.order)
        )
        for document in result.scalars().all():
            documents.setdefault(document.event_id or document.series_id, []).append(document)

        calendar = []
        for event, series_title in rows:
            event_documents = documents.get(event.series_id, []) if event.series_id else []
            event_documents = event_documents + documents.get(event.id, [])
            calendar.append(
                PublicEventResponse(
                    **EventResponse.model_validate(event).model_dump(),
                    series_title=series_title,
                    notices=[PublicNotice.model_validate(n) for n in notices[event.id]],
                    documents=[PublicDocument.model_validate(d) for d in event_documents],
                )
            )
        return calendar

        return list(result.scalars().all())

    async def update(
        self, event_id: UUID, data: EventUpdate, user_id: UUID
    ) -> Event | None:
        """Update an event."""
        event = await self.get_by_id(event_id, user_id)
        if not event:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if "series_id" in update_data:
            await self._check_series(update_data["series_id"], user_id)
        for field, value in update_data.items():
            setattr(event, field, value)
        if _as_utc(event.end_date) < _as_utc(event.start_date):
            raise ValueError("End date must not be before start date")

        await self.db.flush()
        await self.db.refresh(event)
        return event

    async def delete(self, event_id: UUID, user_id: UUID) -> bool:
        """Delete an event with its notices, documents, results and timeline."""
        event = await self.get_by_id(event_id, user_id)
        if not event:
            return False

        await self.db.execute(delete(Notice).where(Notice.event_id == event_id))
        await self.db.execute(delete(Document).where(Document.event_id == event_id))
        await self.db.execute(delete(EventResult).where(EventResult.event_id == event_id))
        await TimelineService(self.db).delete_for_event(event_id)
        await self.db.delete(event)
        await self.db.flush()
        return True
