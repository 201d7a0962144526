"""Bearer-token authentication against Supabase Auth."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from contentforge.errors import StorageError
from contentforge.services import storage

logger = logging.getLogger(__name__)

# auto_error=False so routes can validate their own inputs before auth
bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthUser:
    id: str
    email: str | None = None


def _unauthorized(detail: str = "Authentication required") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def resolve_user(credentials: HTTPAuthorizationCredentials | None) -> AuthUser:
    """Turn bearer credentials into the Supabase user, or raise 401."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized()

    try:
        client = storage.get_supabase()
    except StorageError as e:
        logger.error("Cannot verify access token: %s", e)
        raise HTTPException(status_code=500, detail="Authentication is not configured") from e

    try:
        response = await asyncio.to_thread(client.auth.get_user, credentials.credentials)
    except Exception as e:
        logger.warning("Access token rejected: %s", e)
        raise _unauthorized() from e

    user = getattr(response, "user", None)
    if user is None or not getattr(user, "id", None):
        raise _unauthorized()
    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> AuthUser:
    """FastAPI dependency resolving the caller from the Authorization header."""
    return await resolve_user(credentials)
