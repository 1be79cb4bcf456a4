from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from paintshop.db.base import Base, SerialPkMixin, TimestampMixin
from paintshop.db.models.security import Usuario

REQUEST_PRIORITIES = ("low", "medium", "high", "urgent")
REQUEST_STATUSES = ("pending", "in_progress", "completed", "cancelled")


class ItemRequest(SerialPkMixin, TimestampMixin, Base):
    """Requisition of an item raised by a user and handled by managers."""
    __tablename__ = "item_requests"

    item_name: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    priority: Mapped[str] = mapped_column(Text, nullable=False, default="medium")
    status: Mapped[str] = mapped_column(Text, nullable=False, default="pending", index=True)
    requested_by: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_to: Mapped[Optional[UUID]] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("usuarios.id", ondelete="SET NULL"), nullable=True
    )

    requester: Mapped[Usuario] = relationship(foreign_keys=[requested_by], lazy="joined")
    assignee: Mapped[Optional[Usuario]] = relationship(foreign_keys=[assigned_to], lazy="joined")
