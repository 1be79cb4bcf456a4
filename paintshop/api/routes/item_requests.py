from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.deps import get_current_user, require_roles
from paintshop.db.session import get_async_session
from paintshop.schemas.common import SuccessResponse
from paintshop.schemas.requests import (
    ClearAllResponse,
    CountResponse,
    ItemRequestCreate,
    ItemRequestRead,
    ItemRequestUpdate,
    ItemRequestWriteResponse,
)
from paintshop.services.requests import ItemRequestService

router = APIRouter(prefix="/item-requests", tags=["Item Requests"])


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ItemRequestRead],
    summary="List item requests",
    description="Newest first. Managers see every request; other roles only their own unless user_id is given.",
)
async def list_item_requests(
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session),
    user_id: Optional[UUID] = Query(None, description="Filter by requester"),
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
) -> List[ItemRequestRead]:
    svc = ItemRequestService(session)
    items = await svc.list_for(user, user_id=user_id, status_filter=status_filter)
    return [ItemRequestRead(**svc.to_read(x)) for x in items]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ItemRequestWriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create item request",
)
async def create_item_request(
    payload: ItemRequestCreate,
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session),
) -> ItemRequestWriteResponse:
    svc = ItemRequestService(session)
    created = await svc.create(user, payload)
    return ItemRequestWriteResponse(data=ItemRequestRead(**svc.to_read(created)), message="Request created")


# PUBLIC_INTERFACE
@router.delete(
    "/clear-all",
    response_model=ClearAllResponse,
    summary="Delete every item request",
    dependencies=[Depends(require_roles("admin"))],
)
async def clear_all_item_requests(session: AsyncSession = Depends(get_async_session)) -> ClearAllResponse:
    deleted = await ItemRequestService(session).clear_all()
    return ClearAllResponse(message=f"{deleted} requests deleted", deletedCount=deleted)


# PUBLIC_INTERFACE
@router.get(
    "/recent",
    response_model=List[ItemRequestRead],
    summary="Recent item requests",
    description="Requests created strictly after created_after (ISO-8601), newest first.",
    dependencies=[Depends(get_current_user)],
)
async def recent_item_requests(
    session: AsyncSession = Depends(get_async_session),
    created_after: Optional[str] = Query(None, description="ISO-8601 instant"),
) -> List[ItemRequestRead]:
    svc = ItemRequestService(session)
    items = await svc.recent(created_after)
    return [ItemRequestRead(**svc.to_read(x)) for x in items]


# PUBLIC_INTERFACE
@router.get(
    "/count/pending",
    response_model=CountResponse,
    summary="Count pending item requests",
    dependencies=[Depends(get_current_user)],
)
async def count_pending_item_requests(session: AsyncSession = Depends(get_async_session)) -> CountResponse:
    return CountResponse(count=await ItemRequestService(session).count_pending())


# PUBLIC_INTERFACE
@router.get(
    "/{request_id}",
    response_model=ItemRequestRead,
    summary="Get item request",
    description="Visible to the requester and to managers.",
)
async def get_item_request(
    request_id: int = Path(...),
    user=Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session),
) -> ItemRequestRead:
    svc = ItemRequestService(session)
    return ItemRequestRead(**svc.to_read(await svc.get_visible(user, request_id)))


# PUBLIC_INTERFACE
@router.put(
    "/{request_id}",
    response_model=ItemRequestWriteResponse,
    summary="Update item request",
    dependencies=[Depends(require_roles("admin", "manager"))],
)
async def update_item_request(
    payload: ItemRequestUpdate,
    request_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> ItemRequestWriteResponse:
    svc = ItemRequestService(session)
    updated = await svc.update(request_id, payload)
    return ItemRequestWriteResponse(data=ItemRequestRead(**svc.to_read(updated)), message="Request updated")


# PUBLIC_INTERFACE
@router.delete(
    "/{request_id}",
    response_model=SuccessResponse,
    summary="Delete item request",
    dependencies=[Depends(require_roles("admin"))],
)
async def delete_item_request(
    request_id: int = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    await ItemRequestService(session).delete(request_id)
    return SuccessResponse(message="Request deleted")
