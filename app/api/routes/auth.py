"""Authentication routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, Response, status
from sqlalchemy import or_, select

from app.api.deps import CurrentUser, DBSession
from app.config import settings
from app.models import RESERVED_USERNAMES, User
from app.schemas.auth import UserCreate, UserLogin, UserResponse
from app.services.auth import REFRESH, auth_service

router = APIRouter(prefix="/auth", tags=["auth"])

# Cookie settings
ACCESS_TOKEN_MAX_AGE = settings.jwt_access_token_expire_minutes * 60
REFRESH_TOKEN_MAX_AGE = settings.jwt_refresh_token_expire_days * 86400


def set_auth_cookies(response: Response, user: User) -> None:
    """Issue a token pair for the user as HTTP-only cookies."""
    access_token, refresh_token = auth_service.issue_tokens(user)
    for key, value, max_age in (
        ("access_token", access_token, ACCESS_TOKEN_MAX_AGE),
        ("refresh_token", refresh_token, REFRESH_TOKEN_MAX_AGE),
    ):
        response.set_cookie(
            key=key,
            value=value,
            httponly=True,
            secure=not settings.is_development,
            samesite="lax",
            max_age=max_age,
            path="/",
        )


def clear_auth_cookies(response: Response) -> None:
    """Clear authentication cookies."""
    response.delete_cookie(key="access_token", path="/")
    response.delete_cookie(key="refresh_token", path="/")


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: DBSession) -> User:
    """Register a new user."""
    if user_data.username.lower() in RESERVED_USERNAMES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"'{user_data.username}' is a reserved username",
        )

    result = await db.execute(
        select(User).where(
            or_(User.email == user_data.email, User.username == user_data.username)
        )
    )
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email or username already registered",
        )

    user = User(
        email=user_data.email,
        username=user_data.username,
        hashed_password=auth_service.hash_password(user_data.password),
    )

    db.add(user)
    await db.flush()
    await db.refresh(user)

    return user


@router.post("/login", response_model=UserResponse)
async def login(user_data: UserLogin, response: Response, db: DBSession) -> User:
    """Login and set HTTP-only cookies."""
    result = await db.execute(select(User).where(User.email == user_data.email))
    user = result.scalar_one_or_none()

    if not user or not auth_service.verify_password(user_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    set_auth_cookies(response, user)
    return user


@router.post("/refresh", response_model=UserResponse)
async def refresh_token(request: Request, response: Response, db: DBSession) -> User:
    """Refresh the token pair using the refresh cookie."""
    token = request.cookies.get("refresh_token")

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No refresh token provided",
        )

    payload = auth_service.verify(token, REFRESH)
    user = None
    if payload is not None:
        try:
            result = await db.execute(select(User).where(User.id == UUID(payload.get("sub", ""))))
            user = result.scalar_one_or_none()
        except ValueError:
            user = None

    if user is None:
        clear_auth_cookies(response)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    if not user.is_active:
        clear_auth_cookies(response)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    set_auth_cookies(response, user)
    return user


@router.post("/logout")
async def logout(response: Response) -> dict:
    """Logout and clear authentication cookies."""
    clear_auth_cookies(response)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser) -> User:
    """Get current authenticated user info."""
    return current_user
