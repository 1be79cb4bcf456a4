from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.db.models.requests import REQUEST_PRIORITIES, REQUEST_STATUSES, ItemRequest
from paintshop.db.models.security import Usuario
from paintshop.repositories.requests import ItemRequestRepository
from paintshop.schemas.requests import ItemRequestCreate, ItemRequestUpdate
from paintshop.services.base import BaseService

logger = logging.getLogger(__name__)

MANAGER_ROLES = ("admin", "manager")


class ItemRequestService(BaseService):
    """Requisition workflow: validation, visibility per role and status changes."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ItemRequestRepository(session)

    # PUBLIC_INTERFACE
    @staticmethod
    def to_read(entity: ItemRequest) -> Dict[str, Any]:
        """Serialize a request with requester and assignee names."""
        return {
            "id": entity.id,
            "item_name": entity.item_name,
            "quantity": entity.quantity,
            "description": entity.description,
            "priority": entity.priority,
            "status": entity.status,
            "requested_by": entity.requested_by,
            "assigned_to": entity.assigned_to,
            "requested_by_name": entity.requester.nome if entity.requester else "User not found",
            "assigned_to_name": entity.assignee.nome if entity.assignee else None,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    # PUBLIC_INTERFACE
    async def list_for(
        self, user: Usuario, *, user_id: Optional[UUID] = None, status_filter: Optional[str] = None
    ) -> List[ItemRequest]:
        """
        List requests visible to the user.

        An explicit user_id filters by requester; otherwise managers see every
        request and other roles only their own.
        """
        requested_by = user_id
        if requested_by is None and user.papel not in MANAGER_ROLES:
            requested_by = user.id
        return await self.repo.list_requests(requested_by=requested_by, status=status_filter)

    # PUBLIC_INTERFACE
    async def create(self, user: Usuario, payload: ItemRequestCreate) -> ItemRequest:
        """Validate and create a pending request on behalf of the user."""
        item_name = (payload.item_name or "").strip()
        if not item_name or payload.quantity is None or not payload.priority:
            raise self.bad_request("item_name, quantity and priority are required")
        if payload.quantity <= 0:
            raise self.bad_request("quantity must be greater than zero")
        if payload.priority not in REQUEST_PRIORITIES:
            raise self.bad_request(f"priority must be one of: {', '.join(REQUEST_PRIORITIES)}")
        created = await self.repo.create_request(
            item_name=item_name,
            quantity=payload.quantity,
            description=payload.description,
            priority=payload.priority,
            requested_by=user.id,
        )
        logger.info("Item request %s created by %s", created.id, user.username)
        return created

    # PUBLIC_INTERFACE
    async def get_visible(self, user: Usuario, request_id: int) -> ItemRequest:
        entity = await self.get_or_404(request_id)
        if entity.requested_by != user.id and user.papel not in MANAGER_ROLES:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return entity

    async def get_or_404(self, request_id: int) -> ItemRequest:
        entity = await self.repo.get_request(request_id)
        if not entity:
            raise self.not_found("Item request")
        return entity

    # PUBLIC_INTERFACE
    async def update(self, request_id: int, payload: ItemRequestUpdate) -> ItemRequest:
        """Apply a manager update; unknown status or priority values are rejected."""
        self.require_choice("status", payload.status, REQUEST_STATUSES)
        self.require_choice("priority", payload.priority, REQUEST_PRIORITIES)
        await self.require_user("assigned_to", payload.assigned_to)
        entity = await self.get_or_404(request_id)
        previous_status = entity.status
        updated = await self.repo.update_request(entity, payload.model_dump(exclude_unset=True))
        if updated.status != previous_status:
            logger.info("Item request %s status %s -> %s", request_id, previous_status, updated.status)
        return updated

    # PUBLIC_INTERFACE
    async def delete(self, request_id: int) -> None:
        await self.get_or_404(request_id)
        await self.repo.delete_request(request_id)
        logger.info("Item request %s deleted", request_id)

    # PUBLIC_INTERFACE
    async def clear_all(self) -> int:
        deleted = await self.repo.delete_all()
        logger.info("Cleared %d item requests", deleted)
        return deleted

    # PUBLIC_INTERFACE
    async def recent(self, created_after: Optional[str]) -> List[ItemRequest]:
        """Requests created strictly after the given ISO instant."""
        if not created_after:
            raise self.bad_request("created_after is required")
        try:
            instant = datetime.fromisoformat(created_after.replace("Z", "+00:00"))
        except ValueError:
            raise self.bad_request("created_after must be an ISO-8601 timestamp")
        if instant.tzinfo is not None:
            instant = instant.astimezone(timezone.utc)
        return await self.repo.list_requests(created_after=instant)

    # PUBLIC_INTERFACE
    async def count_pending(self) -> int:
        return await self.repo.count_by_status("pending")
