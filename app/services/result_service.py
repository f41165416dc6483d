"""Service for race result documents."""

import logging
from uuid import UUID

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Event, EventResult, User
from app.schemas.result import ResultsReplace

logger = logging.getLogger(__name__)


class ResultService:
    """Service for publishing and listing event results."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_event(self, event_id: UUID, user_id: UUID) -> Event | None:
        result = await self.db.execute(
            select(Event).where(Event.id == event_id, Event.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_event(self, event_id: UUID, user_id: UUID) -> list[EventResult] | None:
        """Results of one of the user's events, latest date range first."""
        if not await self._get_event(event_id, user_id):
            return None

        result = await self.db.execute(
            select(EventResult)
            .where(EventResult.event_id == event_id)
            .order_by(EventResult.date_range.desc(), EventResult.created_at)
        )
        return list(result.scalars().all())

    async def replace_for_event(
        self, event_id: UUID, data: ResultsReplace, user_id: UUID
    ) -> list[EventResult] | None:
        """Replace every result of the event with ``data.results``."""
        if not await self._get_event(event_id, user_id):
            return None

        await self.db.execute(delete(EventResult).where(EventResult.event_id == event_id))
        results = [EventResult(event_id=event_id, **item.model_dump()) for item in data.results]
        self.db.add_all(results)
        await self.db.flush()
        for item in results:
            await self.db.refresh(item)

        logger.info("Published %d results for event %s", len(results), event_id)
        return results

    async def events_with_results(
        self, user_id: UUID, search: str | None = None
    ) -> list[tuple[Event, list[EventResult]]]:
        """The user's events that have results, newest first.

        ``search`` matches the event title, description or a result's boat class.
        """
        has_results = exists().where(EventResult.event_id == Event.id)
        query = select(Event).where(Event.user_id == user_id, has_results)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Event.title.ilike(pattern),
                    Event.description.ilike(pattern),
                    exists().where(
                        EventResult.event_id == Event.id,
                        EventResult.boat_class.ilike(pattern),
                    ),
                )
            )
        events = list((await self.db.execute(query.order_by(Event.start_date.desc()))).scalars().all())
        if not events:
            return []

        result = await self.db.execute(
            select(EventResult)
            .where(EventResult.event_id.in_([event.id for event in events]))
            .order_by(EventResult.boat_class, EventResult.date_range)
        )
        by_event: dict[UUID, list[EventResult]] = {event.id: [] for event in events}
        for item in result.scalars().all():
            by_event[item.event_id].append(item)
        return [(event, by_event[event.id]) for event in events]

    async def public_results(
        self, username: str, search: str | None = None
    ) -> list[tuple[Event, list[EventResult]]] | None:
        """Results page of a profile, or None if the profile does not exist."""
        result = await self.db.execute(
            select(User.id).where(User.username == username, User.is_active.is_(True))
        )
        user_id = result.scalar_one_or_none()
        if user_id is None:
            return None
        return await self.events_with_results(user_id, search)
