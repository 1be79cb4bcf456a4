from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.deps import get_current_user
from paintshop.core.security import create_session_token, verify_password
from paintshop.db.session import get_async_session
from paintshop.repositories.security import UserRepository
from paintshop.schemas.auth import LoginRequest, LoginResponse, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


# PUBLIC_INTERFACE
@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate with username and password and receive a session token valid for 24 hours.",
)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_async_session),
) -> LoginResponse:
    """Authenticate user and issue a session token."""
    repo = UserRepository(session)
    user = await repo.get_user_by_username(payload.username)
    if not user or not verify_password(payload.password, user.senha):
        logger.warning("Failed login for %s", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.ativo:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User is inactive")

    token = create_session_token(user.id, user.username)
    logger.info("User %s logged in", user.username)
    return LoginResponse(user=UserRead.model_validate(user), token=token)


# PUBLIC_INTERFACE
@router.get(
    "/me",
    response_model=UserRead,
    summary="Read current user",
    description="Return the user owning the bearer token.",
)
async def read_current_user(user=Depends(get_current_user)) -> UserRead:
    """Return current user profile."""
    return UserRead.model_validate(user)
