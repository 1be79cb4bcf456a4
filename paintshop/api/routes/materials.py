from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.deps import get_current_user
from paintshop.db.session import get_async_session
from paintshop.repositories.materials import (
    ConsumptionConfigRepository,
    MaterialSettingRepository,
    ModelConsumptionRepository,
)
from paintshop.schemas.common import MessageResponse
from paintshop.schemas.materials import (
    ConsumptionConfigCreate,
    ConsumptionConfigRead,
    ConsumptionConfigReset,
    ConsumptionConfigUpdate,
    MaterialSettingRead,
    MaterialSettingsReset,
    MaterialSettingUpdate,
    MaterialSettingUpsert,
    ModelConsumptionRead,
    ModelConsumptionUpsert,
)
from paintshop.services.consumption import DEFAULT_MATERIAL_SETTINGS, default_configuration

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Materials"], dependencies=[Depends(get_current_user)])


# Consumption configuration

# PUBLIC_INTERFACE
@router.get(
    "/configuracao-consumo",
    response_model=ConsumptionConfigRead,
    summary="Current consumption configuration",
    description="Latest stored configuration, or the built-in default (id 'default') when none is stored.",
)
async def get_consumption_config(session: AsyncSession = Depends(get_async_session)) -> ConsumptionConfigRead:
    latest = await ConsumptionConfigRepository(session).get_latest()
    if latest is None:
        return ConsumptionConfigRead(id="default", configuracao=default_configuration())
    return ConsumptionConfigRead.model_validate(latest)


# PUBLIC_INTERFACE
@router.post(
    "/configuracao-consumo",
    response_model=ConsumptionConfigRead,
    status_code=status.HTTP_201_CREATED,
    summary="Store consumption configuration",
)
async def create_consumption_config(
    payload: ConsumptionConfigCreate,
    session: AsyncSession = Depends(get_async_session),
) -> ConsumptionConfigRead:
    if payload.configuracao is None:
        raise HTTPException(status_code=400, detail="configuracao is required")
    row = await ConsumptionConfigRepository(session).create(payload.configuracao)
    logger.info("Consumption configuration %s stored", row.id)
    return ConsumptionConfigRead.model_validate(row)


# PUBLIC_INTERFACE
@router.put(
    "/configuracao-consumo",
    response_model=ConsumptionConfigRead,
    summary="Update consumption configuration",
)
async def update_consumption_config(
    payload: ConsumptionConfigUpdate,
    session: AsyncSession = Depends(get_async_session),
) -> ConsumptionConfigRead:
    if payload.id is None or payload.configuracao is None:
        raise HTTPException(status_code=400, detail="id and configuracao are required")
    repo = ConsumptionConfigRepository(session)
    row = await repo.get_by_id(payload.id)
    if not row:
        raise HTTPException(status_code=404, detail="Configuration not found")
    row = await repo.update(row, payload.configuracao)
    return ConsumptionConfigRead.model_validate(row)


# PUBLIC_INTERFACE
@router.post(
    "/configuracao-consumo/reset",
    response_model=ConsumptionConfigReset,
    summary="Reset consumption configuration",
    description="Store the built-in default configuration as the current one.",
)
async def reset_consumption_config(session: AsyncSession = Depends(get_async_session)) -> ConsumptionConfigReset:
    row = await ConsumptionConfigRepository(session).create(default_configuration())
    logger.info("Consumption configuration reset to defaults")
    return ConsumptionConfigReset(
        message="Configuration reset to defaults", data=ConsumptionConfigRead.model_validate(row)
    )


# Material settings

# PUBLIC_INTERFACE
@router.get(
    "/material-settings",
    response_model=List[MaterialSettingRead],
    summary="List material settings",
)
async def list_material_settings(session: AsyncSession = Depends(get_async_session)) -> List[MaterialSettingRead]:
    rows = await MaterialSettingRepository(session).list_settings()
    return [MaterialSettingRead.model_validate(r) for r in rows]


# PUBLIC_INTERFACE
@router.post(
    "/material-settings",
    response_model=MaterialSettingRead,
    summary="Upsert material setting",
    description="Insert or update the setting for material_name; missing rates default to 0.",
)
async def upsert_material_setting(
    payload: MaterialSettingUpsert,
    session: AsyncSession = Depends(get_async_session),
) -> MaterialSettingRead:
    if not payload.material_name:
        raise HTTPException(status_code=400, detail="material_name is required")
    row = await MaterialSettingRepository(session).upsert(
        material_name=payload.material_name,
        dilution_rate=payload.dilution_rate or 0,
        diluent_type=payload.diluent_type,
        catalyst_rate=payload.catalyst_rate or 0,
    )
    return MaterialSettingRead.model_validate(row)


# PUBLIC_INTERFACE
@router.post(
    "/material-settings/reset",
    response_model=MaterialSettingsReset,
    summary="Reset material settings",
    description="Replace every material setting with the defaults.",
)
async def reset_material_settings(session: AsyncSession = Depends(get_async_session)) -> MaterialSettingsReset:
    repo = MaterialSettingRepository(session)
    await repo.delete_all()
    inserted = await repo.insert_many(DEFAULT_MATERIAL_SETTINGS)
    logger.info("Material settings reset to %d defaults", len(inserted))
    return MaterialSettingsReset(
        message="Material settings reset to defaults",
        inserted=[MaterialSettingRead.model_validate(r) for r in inserted],
    )


# PUBLIC_INTERFACE
@router.put(
    "/material-settings/{setting_id}",
    response_model=MaterialSettingRead,
    summary="Update material setting",
)
async def update_material_setting(
    payload: MaterialSettingUpdate,
    setting_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> MaterialSettingRead:
    repo = MaterialSettingRepository(session)
    row = await repo.get_by_id(setting_id)
    if not row:
        raise HTTPException(status_code=404, detail="Material setting not found")
    row = await repo.update(row, payload.model_dump(exclude_unset=True))
    return MaterialSettingRead.model_validate(row)


# PUBLIC_INTERFACE
@router.delete(
    "/material-settings/{setting_id}",
    response_model=MessageResponse,
    summary="Delete material setting",
)
async def delete_material_setting(
    setting_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    repo = MaterialSettingRepository(session)
    row = await repo.get_by_id(setting_id)
    if not row:
        raise HTTPException(status_code=404, detail="Material setting not found")
    await repo.delete(row)
    return MessageResponse(message="Material setting deleted")


# Model material consumption

# PUBLIC_INTERFACE
@router.get(
    "/model-material-consumption",
    response_model=List[ModelConsumptionRead],
    summary="List per-model consumption",
)
async def list_model_consumption(session: AsyncSession = Depends(get_async_session)) -> List[ModelConsumptionRead]:
    rows = await ModelConsumptionRepository(session).list_entries()
    return [ModelConsumptionRead.model_validate(r) for r in rows]


# PUBLIC_INTERFACE
@router.post(
    "/model-material-consumption",
    response_model=ModelConsumptionRead,
    summary="Upsert per-model consumption",
    description="Insert or update the ml per piece for (model, color); missing amounts default to 0.",
)
async def upsert_model_consumption(
    payload: ModelConsumptionUpsert,
    session: AsyncSession = Depends(get_async_session),
) -> ModelConsumptionRead:
    if not payload.model or not payload.color:
        raise HTTPException(status_code=400, detail="model and color are required")
    row = await ModelConsumptionRepository(session).upsert(
        model=payload.model,
        color=payload.color,
        primer_ml_per_piece=payload.primer_ml_per_piece or 0,
        base_ml_per_piece=payload.base_ml_per_piece or 0,
        varnish_ml_per_piece=payload.varnish_ml_per_piece or 0,
    )
    return ModelConsumptionRead.model_validate(row)


# PUBLIC_INTERFACE
@router.get(
    "/model-material-consumption/{entry_id}",
    response_model=ModelConsumptionRead,
    summary="Get per-model consumption",
)
async def get_model_consumption(
    entry_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> ModelConsumptionRead:
    row = await ModelConsumptionRepository(session).get_by_id(entry_id)
    if not row:
        raise HTTPException(status_code=404, detail="Model consumption entry not found")
    return ModelConsumptionRead.model_validate(row)


# PUBLIC_INTERFACE
@router.delete(
    "/model-material-consumption/{entry_id}",
    response_model=MessageResponse,
    summary="Delete per-model consumption",
)
async def delete_model_consumption(
    entry_id: UUID = Path(...),
    session: AsyncSession = Depends(get_async_session),
) -> MessageResponse:
    repo = ModelConsumptionRepository(session)
    row = await repo.get_by_id(entry_id)
    if not row:
        raise HTTPException(status_code=404, detail="Model consumption entry not found")
    await repo.delete(row)
    return MessageResponse(message="Model consumption entry deleted")
