from __future__ import annotations

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select

from paintshop.db.models.production import Registro
from .base import BaseRepository


class ProductionRecordRepository(BaseRepository):
    """Repository for hourly production records (registros)."""

    async def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        newest_first: bool = True,
    ) -> List[Registro]:
        """List records, optionally bounded by an inclusive date range."""
        stmt = select(Registro)
        if start_date is not None:
            stmt = stmt.where(Registro.data >= start_date)
        if end_date is not None:
            stmt = stmt.where(Registro.data <= end_date)
        if newest_first:
            stmt = stmt.order_by(Registro.data.desc(), Registro.hora.desc())
        else:
            stmt = stmt.order_by(Registro.data.asc(), Registro.hora.asc())
        res = await self.scalars(stmt)
        return list(res)

    async def get_record(self, record_id: UUID) -> Optional[Registro]:
        stmt = select(Registro).where(Registro.id == record_id).execution_options(populate_existing=True)
        return await self.scalar_one_or_none(stmt)

    async def find_by_slot(
        self, data: date, hora: str, *, exclude_id: Optional[UUID] = None
    ) -> Optional[Registro]:
        """Return the record occupying (data, hora), ignoring exclude_id."""
        stmt = select(Registro).where(Registro.data == data, Registro.hora == hora)
        if exclude_id is not None:
            stmt = stmt.where(Registro.id != exclude_id)
        return await self.scalar_one_or_none(stmt)

    async def create_record(self, record: Registro) -> Registro:
        return await self.save(record, new=True)

    async def save_record(self, record: Registro) -> Registro:
        """Commit pending changes on a loaded record and reload it."""
        return await self.save(record)

    async def delete_record(self, record_id: UUID) -> int:
        res = await self.execute(delete(Registro).where(Registro.id == record_id))
        await self.commit()
        return int(res.rowcount or 0)
