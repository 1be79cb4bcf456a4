from __future__ import annotations

from typing import Any, Iterable, Optional, TypeVar

from sqlalchemy import Executable, Select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository:
    """
    Thin wrapper over an AsyncSession shared by the paint-line repositories.

    Writes commit immediately; save() reloads the row afterwards so server
    defaults (ids, created_at, updated_at) are present on what the API returns.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        return await self.session.execute(statement, params or {})

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one_or_none(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Single entity or None; joined eager loads are de-duplicated first."""
        result = await self.execute(statement, params)
        return result.unique().scalar_one_or_none()

    async def first(self, statement: Select) -> Any:
        """First entity of an ordered statement, or None."""
        result = await self.scalars(statement.limit(1))
        return result.first()

    async def add(self, entity: Any) -> None:
        self.session.add(entity)

    async def add_all(self, entities: Iterable[Any]) -> None:
        self.session.add_all(list(entities))

    async def commit(self) -> None:
        await self.session.commit()

    async def refresh(self, entity: T) -> T:
        await self.session.refresh(entity)
        return entity

    async def save(self, entity: T, *, new: bool = False) -> T:
        """Commit pending changes of an entity (adding it first when new) and reload it."""
        if new:
            self.session.add(entity)
        await self.commit()
        return await self.refresh(entity)

    async def delete(self, entity: Any) -> None:
        await self.session.delete(entity)
        await self.commit()
