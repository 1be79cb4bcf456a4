from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select

from paintshop.db.models.requests import ItemRequest
from .base import BaseRepository


class ItemRequestRepository(BaseRepository):
    """Repository for item requisitions."""

    async def list_requests(
        self,
        *,
        requested_by: Optional[UUID] = None,
        status: Optional[str] = None,
        created_after: Optional[datetime] = None,
    ) -> List[ItemRequest]:
        """List requests newest first with optional filters."""
        stmt = select(ItemRequest)
        if requested_by is not None:
            stmt = stmt.where(ItemRequest.requested_by == requested_by)
        if status:
            stmt = stmt.where(ItemRequest.status == status)
        if created_after is not None:
            stmt = stmt.where(ItemRequest.created_at > created_after)
        stmt = stmt.order_by(ItemRequest.created_at.desc(), ItemRequest.id.desc())
        res = await self.scalars(stmt)
        return list(res)

    async def get_request(self, request_id: int) -> Optional[ItemRequest]:
        stmt = (
            select(ItemRequest)
            .where(ItemRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        return await self.scalar_one_or_none(stmt)

    async def create_request(
        self,
        *,
        item_name: str,
        quantity: int,
        description: Optional[str],
        priority: str,
        requested_by: UUID,
    ) -> ItemRequest:
        entity = ItemRequest(
            item_name=item_name,
            quantity=quantity,
            description=description,
            priority=priority,
            status="pending",
            requested_by=requested_by,
        )
        await self.add(entity)
        await self.commit()
        return await self.get_request(entity.id)  # type: ignore

    async def update_request(self, entity: ItemRequest, values: Dict[str, Any]) -> ItemRequest:
        for key, value in values.items():
            if value is not None:
                setattr(entity, key, value)
        await self.commit()
        return await self.get_request(entity.id)  # type: ignore

    async def delete_request(self, request_id: int) -> int:
        res = await self.execute(delete(ItemRequest).where(ItemRequest.id == request_id))
        await self.commit()
        return int(res.rowcount or 0)

    async def delete_all(self) -> int:
        res = await self.execute(delete(ItemRequest))
        await self.commit()
        return int(res.rowcount or 0)

    async def count_by_status(self, status: str) -> int:
        stmt = select(func.count(ItemRequest.id)).where(ItemRequest.status == status)
        res = await self.execute(stmt)
        return int(res.scalar_one())
