"""Service for event series operations."""

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Document, Event, Series
from app.schemas.series import SeriesCreate, SeriesUpdate


class SeriesService:
    """Service for series CRUD operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: SeriesCreate, user_id: UUID) -> Series:
        """Create a new series."""
        series = Series(user_id=user_id, **data.model_dump())
        self.db.add(series)
        await self.db.flush()
        await self.db.refresh(series)
        return series

    async def get_by_id(self, series_id: UUID, user_id: UUID) -> Series | None:
        """Get a series by ID if it belongs to user."""
        result = await self.db.execute(
            select(Series).where(Series.id == series_id, Series.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[Series]:
        """List a user's series, newest first."""
        result = await self.db.execute(
            select(Series)
            .where(Series.user_id == user_id)
            .order_by(Series.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(
        self, series_id: UUID, data: SeriesUpdate, user_id: UUID
    ) -> Series | None:
        """Update a series."""
        series = await self.get_by_id(series_id, user_id)
        if not series:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(series, field, value)

        await self.db.flush()
        await self.db.refresh(series)
        return series

    async def delete(self, series_id: UUID, user_id: UUID) -> bool:
        """Delete a series and its documents; its events are kept and detached."""
        series = await self.get_by_id(series_id, user_id)
        if not series:
            return False

        await self.db.execute(
            update(Event).where(Event.series_id == series_id).values(series_id=None)
        )
        await self.db.execute(delete(Document).where(Document.series_id == series_id))
        await self.db.delete(series)
        await self.db.flush()
        return True
