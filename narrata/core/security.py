"""
Authentication

Verifies Supabase Auth access tokens (HS256 JWTs signed with the project
secret) and exposes the caller as a FastAPI dependency.
"""
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from .config import settings
from .database import get_db
from .exceptions import UnauthorizedException, ForbiddenException

JWT_ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    """Authenticated caller"""
    id: str
    email: Optional[str] = None
    role: Optional[str] = None


def decode_access_token(token: str) -> dict:
    """Decode and verify an access token, raising UnauthorizedException"""
    if not settings.supabase_jwt_secret:
        logger.error("SUPABASE_JWT_SECRET is not configured")
        raise UnauthorizedException("Authentication is not configured")

    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[JWT_ALGORITHM],
            audience=settings.supabase_jwt_audience,
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedException("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid access token: {}", e)
        raise UnauthorizedException("Invalid token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> CurrentUser:
    """
    Resolve the caller from the bearer token

    Usage:
        @router.get("/items")
        async def get_items(user: CurrentUser = Depends(get_current_user)):
            ...
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Missing bearer token")

    payload = decode_access_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedException("Token has no subject")

    return CurrentUser(
        id=str(user_id),
        email=payload.get("email"),
        role=payload.get("role"),
    )


async def require_admin(
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Allow only callers whose profile role is admin"""
    from narrata.models.profile import Profile

    profile = await db.get(Profile, user.id)
    if profile is None or profile.role != "admin":
        raise ForbiddenException("Admin access required")
    return user
