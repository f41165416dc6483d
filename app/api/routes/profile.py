"""Profile and account settings routes."""

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, DBSession
from app.models import User
from app.schemas.auth import UserResponse
from app.schemas.profile import ProfileUpdate, TimezoneSetting
from app.services.user_service import UserService

router = APIRouter(tags=["profile"])


@router.put("/profile", response_model=UserResponse)
async def update_profile(data: ProfileUpdate, current_user: CurrentUser, db: DBSession) -> User:
    """Update bio, profile image and username."""
    try:
        return await UserService(db).update_profile(current_user, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/settings/timezone", response_model=TimezoneSetting)
async def get_timezone(current_user: CurrentUser) -> TimezoneSetting:
    """Time zone event dates are shown in."""
    return TimezoneSetting(timezone=current_user.timezone)


@router.put("/settings/timezone", response_model=TimezoneSetting)
async def update_timezone(
    data: TimezoneSetting, current_user: CurrentUser, db: DBSession
) -> TimezoneSetting:
    """Change the time zone event dates are shown in."""
    timezone = await UserService(db).set_timezone(current_user, data.timezone)
    return TimezoneSetting(timezone=timezone)
