"""Pydantic schemas for profile and account settings."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class ProfileUpdate(BaseModel):
    """Bio, picture and public username; omitted fields are kept."""

    bio: str | None = Field(None, max_length=500)
    profile_image: str | None = Field(None, max_length=2048)
    username: str | None = Field(None, min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")

    @field_validator("bio", "username")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value


class TimezoneSetting(BaseModel):
    """IANA time zone used to display event dates."""

    timezone: str = Field(..., min_length=1, max_length=64)

    @field_validator("timezone")
    @classmethod
    def known_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"Unknown time zone: {value}")
        return value
