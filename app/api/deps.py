"""Request dependencies: database session and the cookie-authenticated user."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.models import User
from app.services.auth import ACCESS, auth_service

ACCESS_COOKIE = "access_token"


async def _user_from_token(token: str, db: AsyncSession) -> User | None:
    """The active or inactive user named by a valid access token."""
    payload = auth_service.verify(token, ACCESS)
    if payload is None:
        return None
    try:
        user_id = UUID(payload.get("sub", ""))
    except ValueError:
        return None
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Signed-in user; 401 without a usable cookie, 403 when deactivated."""
    token = request.cookies.get(ACCESS_COOKIE)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    user = await _user_from_token(token, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )
    return user


async def get_optional_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Signed-in user for endpoints that also serve anonymous visitors."""
    token = request.cookies.get(ACCESS_COOKIE)
    if not token:
        return None
    user = await _user_from_token(token, db)
    if user is None or not user.is_active:
        return None
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]
DBSession = Annotated[AsyncSession, Depends(get_db)]
