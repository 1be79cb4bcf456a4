from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.logging import username_var
from paintshop.core.security import InvalidTokenError, decode_session_token
from paintshop.db.models.security import Usuario
from paintshop.db.session import get_async_session
from paintshop.repositories.security import UserRepository

logger = logging.getLogger(__name__)

# Bearer scheme for docs; missing headers are reported as 401 by get_current_user.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# PUBLIC_INTERFACE
async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_async_session),
) -> Usuario:
    """
    Resolve and return the current user from the Authorization bearer token.

    Validates the session token and loads the matching active user.
    """
    if not token:
        raise _unauthorized("Access token required")
    try:
        claims = decode_session_token(token)
        user_id = UUID(str(claims.user_id))
    except (InvalidTokenError, ValueError):
        raise _unauthorized("Invalid or expired token")

    repo = UserRepository(session)
    user = await repo.get_active_user_by_id(user_id)
    if not user:
        logger.warning("Token for unknown or inactive user %s", claims.username)
        raise _unauthorized("User not found or inactive")
    username_var.set(user.username)
    return user


# PUBLIC_INTERFACE
def require_roles(*required: str):
    """
    Create a dependency that requires the current user to hold one of the given roles.
    """

    async def _dep(user: Usuario = Depends(get_current_user)) -> Usuario:
        if user.papel not in required:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user

    return _dep
