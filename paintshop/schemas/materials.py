from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field


class ConsumptionConfigRead(BaseModel):
    """Consumption configuration row; id is 'default' for the built-in configuration."""
    id: Union[UUID, str] = Field(...)
    configuracao: Dict[str, Any] = Field(...)
    created_at: Optional[datetime] = Field(None)
    updated_at: Optional[datetime] = Field(None)

    class Config:
        from_attributes = True


class ConsumptionConfigCreate(BaseModel):
    configuracao: Optional[Dict[str, Any]] = Field(None, description="Full configuration document")


class ConsumptionConfigUpdate(BaseModel):
    id: Optional[UUID] = Field(None, description="Configuration row id")
    configuracao: Optional[Dict[str, Any]] = Field(None, description="Full configuration document")


class ConsumptionConfigReset(BaseModel):
    message: str
    data: ConsumptionConfigRead


class MaterialSettingRead(BaseModel):
    id: UUID = Field(...)
    material_name: str = Field(...)
    dilution_rate: float = Field(...)
    diluent_type: Optional[str] = Field(None)
    catalyst_rate: float = Field(...)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)

    class Config:
        from_attributes = True


class MaterialSettingUpsert(BaseModel):
    """Upsert payload keyed by material_name."""
    material_name: Optional[str] = Field(None, description="Unique material key")
    dilution_rate: Optional[float] = Field(None)
    diluent_type: Optional[str] = Field(None)
    catalyst_rate: Optional[float] = Field(None)


class MaterialSettingUpdate(BaseModel):
    dilution_rate: Optional[float] = Field(None)
    diluent_type: Optional[str] = Field(None)
    catalyst_rate: Optional[float] = Field(None)


class MaterialSettingsReset(BaseModel):
    message: str
    inserted: List[MaterialSettingRead] = Field(default_factory=list)


class ModelConsumptionRead(BaseModel):
    id: UUID = Field(...)
    model: str = Field(...)
    color: str = Field(...)
    primer_ml_per_piece: float = Field(...)
    base_ml_per_piece: float = Field(...)
    varnish_ml_per_piece: float = Field(...)
    created_at: datetime = Field(...)
    updated_at: datetime = Field(...)

    class Config:
        from_attributes = True


class ModelConsumptionUpsert(BaseModel):
    """Upsert payload keyed by (model, color)."""
    model: Optional[str] = Field(None)
    color: Optional[str] = Field(None)
    primer_ml_per_piece: Optional[float] = Field(None)
    base_ml_per_piece: Optional[float] = Field(None)
    varnish_ml_per_piece: Optional[float] = Field(None)
