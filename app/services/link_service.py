"""Service for profile link operations."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models import CALENDAR_URL, Link, LinkType, User
from app.schemas.link import LinkCreate, LinkUpdate
from app.schemas.reorder import LinkOrderRequest
from app.services.ordering import OrderingGateway, OrderValidationError, link_scope
from app.services.reorder_engine import PositionUpdate

logger = logging.getLogger(__name__)


class LinkService:
    """Service for link CRUD and ordering."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.ordering = OrderingGateway(db)

    async def create(self, data: LinkCreate, user_id: UUID) -> Link:
        """Create a link at the end of the user's list."""
        position = await self.ordering.next_position(link_scope(user_id))

        link = Link(
            user_id=user_id,
            title=data.title,
            url=CALENDAR_URL if data.type == LinkType.CALENDAR else data.url,
            type=data.type,
            platform=data.platform,
            is_public=data.is_public,
            order=position,
        )
        self.db.add(link)
        await self.db.flush()
        await self.db.refresh(link)

        return link

    async def get_by_id(self, link_id: UUID, user_id: UUID) -> Link | None:
        """Get a link by ID if it belongs to user."""
        result = await self.db.execute(
            select(Link).where(Link.id == link_id, Link.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[Link]:
        """List all links of a user in display order."""
        return await self.ordering.load(link_scope(user_id))

    async def list_public(self, username: str) -> list[Link] | None:
        """Public links of a profile, or None if the profile does not exist."""
        result = await self.db.execute(
            select(User).where(User.username == username, User.is_active.is_(True))
        )
        user = result.scalar_one_or_none()
        if not user:
            return None

        result = await self.db.execute(
            select(Link)
            .where(Link.user_id == user.id, Link.is_public.is_(True))
            .order_by(Link.order, Link.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, link_id: UUID, data: LinkUpdate, user_id: UUID) -> Link | None:
        """Update a link. Position changes go through :meth:`reorder`."""
        link = await self.get_by_id(link_id, user_id)
        if not link:
            return None

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise ValueError("No update data provided")
        for field, value in update_data.items():
            setattr(link, field, value)
        if link.type == LinkType.SOCIAL and link.platform is None:
            raise ValueError("Social links require a platform")
        if link.type == LinkType.CALENDAR:
            link.url = CALENDAR_URL

        await self.db.flush()
        await self.db.refresh(link)

        return link

    async def delete(self, link_id: UUID, user_id: UUID) -> bool:
        """Delete a link and close the gap it leaves."""
        link = await self.get_by_id(link_id, user_id)
        if not link:
            return False

        await self.db.delete(link)
        await self.db.flush()
        await self.ordering.close_gap(link_scope(user_id))

        return True

    async def reorder(self, request: LinkOrderRequest, user_id: UUID) -> list[Link]:
        """Apply a link order batch for the user, all-or-nothing."""
        if len(request.links) > settings.max_links_per_order:
            raise OrderValidationError(
                f"Too many links. Maximum allowed is {settings.max_links_per_order}"
            )
        if not request.links:
            return []

        updates = [
            PositionUpdate(item.id, index if item.order is None else item.order)
            for index, item in enumerate(request.links)
        ]
        return await self.ordering.commit_order(link_scope(user_id), updates)
