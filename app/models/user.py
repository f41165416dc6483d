"""User model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.link import Link


# Usernames that would shadow application routes on the public profile
RESERVED_USERNAMES = {
    "admin", "settings", "api", "login", "logout", "signup", "register",
    "dashboard", "app", "static", "assets", "public", "health", "status",
    "docs", "help", "support", "calendar", "results", "null", "undefined",
}


class User(Base, UUIDMixin, TimestampMixin):
    """User model for authentication and the public profile."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), default="UTC", nullable=False)
    bio: Mapped[str] = mapped_column(Text, default="", nullable=False)
    profile_image: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Relationships
    links: Mapped[list["Link"]] = relationship(
        "Link",
        back_populates="user",
        passive_deletes=True,
    )
