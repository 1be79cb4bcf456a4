from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, select

from paintshop.db.models.materials import (
    ConsumptionConfiguration,
    MaterialSetting,
    ModelMaterialConsumption,
)
from .base import BaseRepository


class ConsumptionConfigRepository(BaseRepository):
    """Repository for consumption configuration documents."""

    async def get_latest(self) -> Optional[ConsumptionConfiguration]:
        stmt = (
            select(ConsumptionConfiguration)
            .order_by(ConsumptionConfiguration.created_at.desc())
        )
        return await self.first(stmt)

    async def get_by_id(self, config_id: UUID) -> Optional[ConsumptionConfiguration]:
        stmt = (
            select(ConsumptionConfiguration)
            .where(ConsumptionConfiguration.id == config_id)
            .execution_options(populate_existing=True)
        )
        return await self.scalar_one_or_none(stmt)

    async def create(self, configuracao: Dict[str, Any]) -> ConsumptionConfiguration:
        row = ConsumptionConfiguration(configuracao=configuracao)
        return await self.save(row, new=True)

    async def update(self, row: ConsumptionConfiguration, configuracao: Dict[str, Any]) -> ConsumptionConfiguration:
        row.configuracao = configuracao
        return await self.save(row)


class MaterialSettingRepository(BaseRepository):
    """Repository for per-material dilution/catalyst settings."""

    async def list_settings(self) -> List[MaterialSetting]:
        res = await self.scalars(select(MaterialSetting).order_by(MaterialSetting.material_name))
        return list(res)

    async def get_by_id(self, setting_id: UUID) -> Optional[MaterialSetting]:
        stmt = (
            select(MaterialSetting)
            .where(MaterialSetting.id == setting_id)
            .execution_options(populate_existing=True)
        )
        return await self.scalar_one_or_none(stmt)

    async def get_by_name(self, material_name: str) -> Optional[MaterialSetting]:
        stmt = select(MaterialSetting).where(MaterialSetting.material_name == material_name)
        return await self.scalar_one_or_none(stmt)

    async def upsert(
        self,
        *,
        material_name: str,
        dilution_rate: float,
        diluent_type: Optional[str],
        catalyst_rate: float,
    ) -> MaterialSetting:
        """Insert or update the row keyed by material_name."""
        row = await self.get_by_name(material_name)
        if row is None:
            row = MaterialSetting(material_name=material_name)
            await self.add(row)
        row.dilution_rate = dilution_rate
        row.diluent_type = diluent_type
        row.catalyst_rate = catalyst_rate
        return await self.save(row)

    async def update(self, row: MaterialSetting, values: Dict[str, Any]) -> MaterialSetting:
        for key, value in values.items():
            if value is not None:
                setattr(row, key, value)
        return await self.save(row)

    async def delete_all(self) -> int:
        res = await self.execute(delete(MaterialSetting))
        return int(res.rowcount or 0)

    async def insert_many(self, rows: Iterable[Dict[str, Any]]) -> List[MaterialSetting]:
        entities = [MaterialSetting(**row) for row in rows]
        await self.add_all(entities)
        await self.commit()
        for entity in entities:
            await self.refresh(entity)
        return entities


class ModelConsumptionRepository(BaseRepository):
    """Repository for per-piece model/colour consumption."""

    async def list_entries(self) -> List[ModelMaterialConsumption]:
        stmt = select(ModelMaterialConsumption).order_by(
            ModelMaterialConsumption.model, ModelMaterialConsumption.color
        )
        res = await self.scalars(stmt)
        return list(res)

    async def get_by_id(self, entry_id: UUID) -> Optional[ModelMaterialConsumption]:
        stmt = (
            select(ModelMaterialConsumption)
            .where(ModelMaterialConsumption.id == entry_id)
            .execution_options(populate_existing=True)
        )
        return await self.scalar_one_or_none(stmt)

    async def upsert(
        self,
        *,
        model: str,
        color: str,
        primer_ml_per_piece: float,
        base_ml_per_piece: float,
        varnish_ml_per_piece: float,
    ) -> ModelMaterialConsumption:
        """Insert or update the row keyed by (model, color)."""
        stmt = select(ModelMaterialConsumption).where(
            ModelMaterialConsumption.model == model,
            ModelMaterialConsumption.color == color,
        )
        row = await self.scalar_one_or_none(stmt)
        if row is None:
            row = ModelMaterialConsumption(model=model, color=color)
            await self.add(row)
        row.primer_ml_per_piece = primer_ml_per_piece
        row.base_ml_per_piece = base_ml_per_piece
        row.varnish_ml_per_piece = varnish_ml_per_piece
        return await self.save(row)
