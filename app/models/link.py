"""Profile link model."""

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from app.models.user import User

CALENDAR_URL = "/calendar"


class LinkType(str, enum.Enum):
    """Link type enum."""

    LINK = "link"
    SOCIAL = "social"
    CALENDAR = "calendar"


class SocialPlatform(str, enum.Enum):
    """Supported social media platforms."""

    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    LINKEDIN = "linkedin"


class Link(Base, UUIDMixin, TimestampMixin):
    """A link on a user's profile page, ordered per user."""

    __tablename__ = "links"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    type: Mapped[LinkType] = mapped_column(
        Enum(LinkType, name="link_type_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=LinkType.LINK,
    )
    platform: Mapped[SocialPlatform | None] = mapped_column(
        Enum(SocialPlatform, name="social_platform_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="links",
    )

    @property
    def is_social(self) -> bool:
        """Social links render together as one group on the profile."""
        return self.type == LinkType.SOCIAL
