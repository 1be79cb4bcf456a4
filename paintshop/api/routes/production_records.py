from __future__ import annotations

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.deps import get_current_user
from paintshop.db.session import get_async_session
from paintshop.schemas.common import SuccessResponse
from paintshop.schemas.production import (
    ProductionRecordDetail,
    ProductionRecordListItem,
    ProductionRecordRow,
    ProductionRecordWrite,
    ProductionRecordWriteResponse,
)
from paintshop.services.production import ProductionService

router = APIRouter(
    prefix="/production-records",
    tags=["Production"],
    dependencies=[Depends(get_current_user)],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ProductionRecordListItem],
    summary="List production records",
    description="List hourly records newest first, optionally filtered by date range and shift.",
)
async def list_production_records(
    session: AsyncSession = Depends(get_async_session),
    startDate: Optional[date] = Query(None, description="First production date (inclusive)"),
    endDate: Optional[date] = Query(None, description="Last production date (inclusive)"),
    shift: Optional[str] = Query(None, description="Shift: 1, 2, 3 or all"),
) -> List[ProductionRecordListItem]:
    svc = ProductionService(session)
    records = await svc.load_records(start_date=startDate, end_date=endDate, shift=shift, newest_first=True)
    return [ProductionRecordListItem(**svc.to_list_item(r)) for r in records]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ProductionRecordWriteResponse,
    summary="Create production record",
    description="Record an hourly slot. Fails with 409 when the slot already has a record for the date.",
)
async def create_production_record(
    payload: ProductionRecordWrite,
    session: AsyncSession = Depends(get_async_session),
) -> ProductionRecordWriteResponse:
    svc = ProductionService(session)
    record = await svc.create_record(payload)
    return ProductionRecordWriteResponse(
        message="Record saved", data=ProductionRecordRow.model_validate(record)
    )


# PUBLIC_INTERFACE
@router.get(
    "/{record_id}",
    response_model=ProductionRecordDetail,
    summary="Get production record",
    description="Get a record with its derived shift and downtime list.",
)
async def get_production_record(
    record_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> ProductionRecordDetail:
    svc = ProductionService(session)
    record = await svc.get_record_or_404(record_id)
    return ProductionRecordDetail(**svc.to_detail(record))


# PUBLIC_INTERFACE
@router.put(
    "/{record_id}",
    response_model=ProductionRecordWriteResponse,
    summary="Update production record",
    description="Replace a record. Fails with 409 when another record holds the target slot.",
)
async def update_production_record(
    payload: ProductionRecordWrite,
    record_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> ProductionRecordWriteResponse:
    svc = ProductionService(session)
    record = await svc.update_record(record_id, payload)
    return ProductionRecordWriteResponse(
        message="Record updated", data=ProductionRecordRow.model_validate(record)
    )


# PUBLIC_INTERFACE
@router.delete(
    "/{record_id}",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete production record",
)
async def delete_production_record(
    record_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    svc = ProductionService(session)
    await svc.delete_record(record_id)
    return SuccessResponse(message="Record deleted")
