"""Service for profile and account settings."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import RESERVED_USERNAMES, User
from app.schemas.profile import ProfileUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for updating the signed-in user's profile."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        """Update bio, picture and username; a new username must be free."""
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise ValueError("No update data provided")

        username = update_data.get("username")
        if username is not None and username != user.username:
            if username.lower() in RESERVED_USERNAMES:
                raise ValueError(f"'{username}' is a reserved username")
            result = await self.db.execute(
                select(User.id).where(User.username == username, User.id != user.id)
            )
            if result.scalar_one_or_none() is not None:
                raise ValueError(f"'{username}' is already taken")

        for field, value in update_data.items():
            setattr(user, field, value)

        await self.db.flush()
        await self.db.refresh(user)
        logger.info("Profile updated for user %s", user.id)
        return user

    async def set_timezone(self, user: User, timezone: str) -> str:
        """Store the zone event dates are displayed in."""
        user.timezone = timezone
        await self.db.flush()
        await self.db.refresh(user)
        return user.timezone
