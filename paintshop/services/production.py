from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.db.models.production import Registro
from paintshop.repositories.production import ProductionRecordRepository
from paintshop.schemas.production import Parada, Producao, ProductionRecordWrite
from paintshop.services.analytics import filter_by_shift
from paintshop.services.base import BaseService
from paintshop.services.classification import area_for_reason, parse_slot_start, shift_label

logger = logging.getLogger(__name__)

_NOON = time(12, 0)


# PUBLIC_INTERFACE
def slot_start_datetime(data: date, hora: Optional[str]) -> datetime:
    """Production date combined with the slot start, or noon when the slot does not parse."""
    start = parse_slot_start(hora)
    if start is not None:
        hour, minute = start
        if hour < 24 and minute < 60:
            return datetime.combine(data, time(hour, minute))
    return datetime.combine(data, _NOON)


def _paradas(payload: ProductionRecordWrite) -> List[Dict[str, Any]]:
    return [
        Parada(
            tipo=d.reason,
            tempo=d.duration,
            criterio=area_for_reason(d.reason),
            descricao=d.description or "",
        ).model_dump()
        for d in payload.downtimes
    ]


def _producao(payload: ProductionRecordWrite) -> List[Dict[str, Any]]:
    return [
        Producao(modelo=p.model, cor=p.color, qtd=p.quantity, repintura=p.isRepaint).model_dump()
        for p in payload.productions
    ]


class ProductionService(BaseService):
    """Hourly production records: slot uniqueness, downtime area tagging and view shaping."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = ProductionRecordRepository(session)

    # PUBLIC_INTERFACE
    async def load_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        shift: Optional[str] = None,
        newest_first: bool = False,
    ) -> List[Registro]:
        """Records within the inclusive date range that belong to the shift filter."""
        records = await self.repo.list_records(
            start_date=start_date, end_date=end_date, newest_first=newest_first
        )
        return filter_by_shift(records, shift)

    # PUBLIC_INTERFACE
    async def get_record_or_404(self, record_id: UUID) -> Registro:
        record = await self.repo.get_record(record_id)
        if not record:
            raise self.not_found("Production record")
        return record

    async def _ensure_slot_free(self, data: date, hora: str, exclude_id: Optional[UUID] = None) -> None:
        clash = await self.repo.find_by_slot(data, hora, exclude_id=exclude_id)
        if clash:
            logger.warning("Duplicate production slot %s %s", data, hora)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"A record already exists for slot {hora} on {data.isoformat()}",
            )

    # PUBLIC_INTERFACE
    async def create_record(self, payload: ProductionRecordWrite) -> Registro:
        """
        Create the record for (targetDate, selectedTime).

        Raises:
            HTTPException: 409 when the slot is already recorded.
        """
        await self._ensure_slot_free(payload.targetDate, payload.selectedTime)
        record = Registro(
            data=payload.targetDate,
            hora=payload.selectedTime,
            skids=payload.skidsProduced,
            skids_vazios=payload.emptySkids,
            paradas=_paradas(payload),
            producao=_producao(payload),
        )
        created = await self.repo.create_record(record)
        logger.info("Production record created for %s %s", created.data, created.hora)
        return created

    # PUBLIC_INTERFACE
    async def update_record(self, record_id: UUID, payload: ProductionRecordWrite) -> Registro:
        """
        Replace a record's contents.

        Raises:
            HTTPException: 404 when missing, 409 when another record holds the target slot.
        """
        record = await self.get_record_or_404(record_id)
        await self._ensure_slot_free(payload.targetDate, payload.selectedTime, exclude_id=record_id)
        record.data = payload.targetDate
        record.hora = payload.selectedTime
        record.skids = payload.skidsProduced
        record.skids_vazios = payload.emptySkids
        record.paradas = _paradas(payload)
        record.producao = _producao(payload)
        updated = await self.repo.save_record(record)
        logger.info("Production record %s updated", record_id)
        return updated

    # PUBLIC_INTERFACE
    async def delete_record(self, record_id: UUID) -> None:
        await self.get_record_or_404(record_id)
        await self.repo.delete_record(record_id)
        logger.info("Production record %s deleted", record_id)

    # PUBLIC_INTERFACE
    @staticmethod
    def to_list_item(record: Registro) -> Dict[str, Any]:
        """Shape a record for the records table."""
        return {
            "id": record.id,
            "time_slot": record.hora or "N/A",
            "shift": "N/A",
            "skids_produced": record.skids or 0,
            "empty_skids": record.skids_vazios or 0,
            "created_at": slot_start_datetime(record.data, record.hora),
            "created_by_name": "Sistema",
            "paradas": list(record.paradas or []),
            "producao": list(record.producao or []),
        }

    # PUBLIC_INTERFACE
    @staticmethod
    def to_detail(record: Registro) -> Dict[str, Any]:
        """Shape a record for the details view, with derived shift and downtime list."""
        paradas = [p for p in (record.paradas or []) if isinstance(p, dict)]
        return {
            "id": record.id,
            "time_slot": record.hora or "N/A",
            "shift": shift_label(record.hora),
            "skids_produced": record.skids or 0,
            "empty_skids": record.skids_vazios or 0,
            "created_at": slot_start_datetime(record.data, record.hora),
            "paradas": paradas,
            "producao": list(record.producao or []),
            "downtimes": [
                {
                    "id": f"{record.id}-{p.get('tipo')}",
                    "reason": p.get("tipo") or "",
                    "duration": int(p.get("tempo") or 0),
                    "description": p.get("descricao"),
                    "criterio": p.get("criterio"),
                }
                for p in paradas
            ],
            "data": record.data,
            "hora": record.hora,
        }
