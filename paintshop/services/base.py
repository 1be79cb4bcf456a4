from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.repositories.security import UserRepository


class BaseService:
    """
    Shared plumbing for the paint-line services.

    A service owns one request's session and the repositories built on it.
    Rule violations are raised as HTTPException so the API error envelope
    carries the status and message unchanged.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def not_found(label: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")

    @staticmethod
    def bad_request(message: str) -> HTTPException:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)

    @classmethod
    def require_choice(cls, field: str, value: Optional[str], choices: Iterable[str]) -> None:
        """Reject a value outside its vocabulary; None means the field was not sent."""
        choices = tuple(choices)
        if value is not None and value not in choices:
            raise cls.bad_request(f"{field} must be one of: {', '.join(choices)}")

    async def require_user(self, field: str, user_id: Optional[UUID]) -> None:
        """Reject a user reference (assignee) that matches no account; None is allowed."""
        if user_id is not None and await UserRepository(self.session).get_user_by_id(user_id) is None:
            raise self.bad_request(f"{field} does not match any user")
