from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ItemRequestCreate(BaseModel):
    """New requisition; validated by the service so messages stay specific."""
    item_name: Optional[str] = Field(None, description="Requested item")
    quantity: Optional[int] = Field(None, description="Quantity, must be positive")
    description: Optional[str] = Field(None)
    priority: Optional[str] = Field(None, description="low, medium, high or urgent")


class ItemRequestUpdate(BaseModel):
    """Manager update; only provided fields change."""
    status: Optional[str] = Field(None, description="pending, in_progress, completed or cancelled")
    priority: Optional[str] = Field(None, description="low, medium, high or urgent")
    assigned_to: Optional[UUID] = Field(None, description="Assignee user id")
    description: Optional[str] = Field(None)


class ItemRequestRead(BaseModel):
    """Requisition with requester and assignee display names."""
    id: int = Field(...)
    item_name: str = Field(...)
    quantity: int = Field(...)
    description: Optional[str] = Field(None)
    priority: str = Field(...)
    status: str = Field(...)
    requested_by: UUID = Field(...)
    assigned_to: Optional[UUID] = Field(None)
    requested_by_name: str = Field("User not found")
    assigned_to_name: Optional[str] = Field(None)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)


class ItemRequestWriteResponse(BaseModel):
    success: bool = Field(True)
    data: ItemRequestRead = Field(...)
    message: str = Field(...)


class ClearAllResponse(BaseModel):
    success: bool = Field(True)
    message: str = Field(...)
    deletedCount: int = Field(...)


class CountResponse(BaseModel):
    count: int = Field(...)
