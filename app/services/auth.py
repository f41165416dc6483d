"""Authentication service with JWT and password hashing.

Stands in for the hosted identity provider: the API only needs a verified
user id per request, carried in an HTTP-only cookie.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.models import User

ACCESS = "access"
REFRESH = "refresh"


class AuthService:
    """Service for authentication operations."""

    def __init__(self):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.access_ttl = timedelta(minutes=settings.jwt_access_token_expire_minutes)
        self.refresh_ttl = timedelta(days=settings.jwt_refresh_token_expire_days)

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())

    def _encode(self, user: User, token_type: str, ttl: timedelta) -> str:
        claims: dict[str, Any] = {
            "sub": str(user.id),
            "username": user.username,
            "type": token_type,
            "exp": datetime.now(timezone.utc) + ttl,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def issue_tokens(self, user: User) -> tuple[str, str]:
        """Create an (access, refresh) token pair for a user."""
        return (
            self._encode(user, ACCESS, self.access_ttl),
            self._encode(user, REFRESH, self.refresh_ttl),
        )

    def verify(self, token: str, token_type: str = ACCESS) -> dict[str, Any] | None:
        """Decode a token and check its type; None when invalid or expired."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        if payload.get("type") != token_type:
            return None
        return payload


auth_service = AuthService()
