from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")


def coerce_int(value: Any) -> int:
    """
    Lenient integer conversion used by the production form.

    Numbers are truncated, strings contribute their leading integer, anything
    else counts as 0.
    """
    if value is None or isinstance(value, bool):
        return int(bool(value))
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


class Parada(BaseModel):
    """Downtime entry as stored on a production record."""
    tipo: str = Field("", description="Downtime reason")
    tempo: int = Field(0, description="Duration in minutes")
    criterio: str = Field("", description="Responsible area")
    descricao: str = Field("", description="Free text description")


class Producao(BaseModel):
    """Painted parts entry as stored on a production record."""
    modelo: str = Field("", description="Part model")
    cor: str = Field("", description="Colour")
    qtd: int = Field(0, description="Quantity painted")
    repintura: bool = Field(False, description="True when the parts were repainted")


class DowntimeInput(BaseModel):
    """Downtime as submitted by the production form."""
    reason: str = Field("", description="Downtime reason")
    duration: int = Field(0, description="Duration in minutes")
    description: Optional[str] = Field(None)

    @field_validator("reason", mode="before")
    @classmethod
    def _reason(cls, v):
        return v or ""

    @field_validator("duration", mode="before")
    @classmethod
    def _duration(cls, v):
        return coerce_int(v)


class ProductionInput(BaseModel):
    """Painted parts as submitted by the production form."""
    model: str = Field("", description="Part model")
    color: str = Field("", description="Colour")
    quantity: int = Field(0, description="Quantity painted")
    isRepaint: bool = Field(False, description="Repaint flag")

    @field_validator("model", "color", mode="before")
    @classmethod
    def _text(cls, v):
        return v or ""

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, v):
        return coerce_int(v)

    @field_validator("isRepaint", mode="before")
    @classmethod
    def _repaint(cls, v):
        return bool(v)


class ProductionRecordWrite(BaseModel):
    """Create/replace payload for an hourly production record."""
    selectedTime: Optional[str] = Field(None, description="Slot label, e.g. '06h00 - 07h00'")
    shift: Optional[str] = Field(None, description="Shift chosen in the form (informational)")
    skidsProduced: Optional[int] = Field(None, description="Skids produced in the slot")
    emptySkids: int = Field(0, description="Empty skids in the slot")
    targetDate: Optional[date] = Field(None, description="Production date")
    downtimes: List[DowntimeInput] = Field(default_factory=list)
    productions: List[ProductionInput] = Field(default_factory=list)

    @field_validator("selectedTime", "targetDate", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("skidsProduced", mode="before")
    @classmethod
    def _skids(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return coerce_int(v)

    @field_validator("emptySkids", mode="before")
    @classmethod
    def _empty_skids(cls, v):
        return coerce_int(v)

    @field_validator("downtimes", "productions", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []

    @model_validator(mode="after")
    def _required(self):
        if not self.selectedTime or self.skidsProduced is None or self.targetDate is None:
            raise ValueError("selectedTime, skidsProduced and targetDate are required")
        return self


class ProductionRecordRow(BaseModel):
    """Raw production record row."""
    id: UUID = Field(...)
    data: date = Field(...)
    hora: str = Field(...)
    skids: int = Field(...)
    skids_vazios: int = Field(...)
    paradas: List[Dict[str, Any]] = Field(default_factory=list)
    producao: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)

    class Config:
        from_attributes = True


class ProductionRecordWriteResponse(BaseModel):
    """Result of a create/update."""
    success: bool = Field(True)
    message: str = Field(...)
    data: ProductionRecordRow = Field(...)


class ProductionRecordListItem(BaseModel):
    """Production record shaped for the records table."""
    id: UUID = Field(...)
    time_slot: str = Field(..., description="Slot label or 'N/A'")
    shift: str = Field("N/A")
    skids_produced: int = Field(...)
    empty_skids: int = Field(...)
    created_at: datetime = Field(..., description="Slot start on the production date")
    created_by_name: str = Field("Sistema")
    paradas: List[Dict[str, Any]] = Field(default_factory=list)
    producao: List[Dict[str, Any]] = Field(default_factory=list)


class DowntimeDetail(BaseModel):
    """Downtime entry shaped for the record details view."""
    id: str = Field(..., description="<record id>-<reason>")
    reason: str = Field(...)
    duration: int = Field(...)
    description: Optional[str] = Field(None)
    criterio: Optional[str] = Field(None)


class ProductionRecordDetail(BaseModel):
    """Single production record with derived shift and downtime list."""
    id: UUID = Field(...)
    time_slot: str = Field(...)
    shift: str = Field(..., description="Turno 1, Turno 2, Turno 3 or N/A")
    skids_produced: int = Field(...)
    empty_skids: int = Field(...)
    created_at: datetime = Field(...)
    paradas: List[Dict[str, Any]] = Field(default_factory=list)
    producao: List[Dict[str, Any]] = Field(default_factory=list)
    downtimes: List[DowntimeDetail] = Field(default_factory=list)
    data: date = Field(...)
    hora: str = Field(...)
