from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.deps import require_roles
from paintshop.core.security import get_password_hash
from paintshop.db.session import get_async_session
from paintshop.repositories.security import UserRepository
from paintshop.schemas.auth import PasswordReset, UserCreate, UserListItem, UserRead, UserUpdate
from paintshop.schemas.common import SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


async def _get_user_or_404(repo: UserRepository, user_id: UUID):
    user = await repo.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[UserListItem],
    summary="List users",
    description="List active users ordered by name.",
    dependencies=[Depends(require_roles("admin", "manager"))],
)
async def list_users(session: AsyncSession = Depends(get_async_session)) -> List[UserListItem]:
    repo = UserRepository(session)
    users = await repo.list_active_users()
    return [UserListItem.model_validate(u) for u in users]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a user account. Username and email must be unique.",
    dependencies=[Depends(require_roles("admin"))],
)
async def create_user(payload: UserCreate, session: AsyncSession = Depends(get_async_session)) -> UserRead:
    repo = UserRepository(session)
    if await repo.find_conflicting_user(username=payload.username, email=payload.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username or email already in use")
    user = await repo.create_user(
        username=payload.username,
        email=payload.email,
        nome=payload.nome,
        senha_hash=get_password_hash(payload.password),
        papel=payload.papel,
        ativo=payload.ativo,
        permissoes_customizadas=payload.permissoes_customizadas,
    )
    logger.info("User %s created", user.username)
    return UserRead.model_validate(user)


# PUBLIC_INTERFACE
@router.put(
    "/{user_id}",
    response_model=UserRead,
    summary="Update user",
    description="Partially update a user's profile, role or active flag.",
    dependencies=[Depends(require_roles("admin"))],
)
async def update_user(
    payload: UserUpdate,
    user_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> UserRead:
    repo = UserRepository(session)
    await _get_user_or_404(repo, user_id)
    if payload.email and await repo.find_conflicting_user(email=payload.email, exclude_id=user_id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already in use")
    user = await repo.update_user(user_id, payload.model_dump(exclude_unset=True))
    return UserRead.model_validate(user)


# PUBLIC_INTERFACE
@router.put(
    "/{user_id}/password",
    response_model=SuccessResponse,
    summary="Reset password",
    description="Set a new password for a user.",
    dependencies=[Depends(require_roles("admin"))],
)
async def reset_password(
    payload: PasswordReset,
    user_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    repo = UserRepository(session)
    await _get_user_or_404(repo, user_id)
    await repo.update_user(user_id, {"senha": get_password_hash(payload.password)})
    logger.info("Password reset for user %s", user_id)
    return SuccessResponse(message="Password updated")


# PUBLIC_INTERFACE
@router.delete(
    "/{user_id}",
    response_model=SuccessResponse,
    summary="Delete user",
    description="Permanently delete a user. Administrators cannot delete themselves.",
)
async def delete_user(
    user_id: UUID = Path(...),
    current=Depends(require_roles("admin")),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    if current.id == user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    repo = UserRepository(session)
    user = await _get_user_or_404(repo, user_id)
    await repo.delete_user(user)
    logger.info("User %s deleted", user_id)
    return SuccessResponse(message="User deleted")
