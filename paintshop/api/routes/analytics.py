from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.deps import get_current_user
from paintshop.core.settings import get_app_settings
from paintshop.db.models.production import Registro
from paintshop.db.session import get_async_session
from paintshop.repositories.materials import ConsumptionConfigRepository
from paintshop.schemas.analytics import (
    ChartSummary,
    DashboardSummary,
    DowntimeByArea,
    DowntimeByCriterio,
    HeatmapCell,
    HourlyPoint,
    HourlyProductionByModel,
    MaterialConsumptionSummary,
    PaintingByModelColor,
    ParetoEntry,
    SCurvePoint,
    TopModelo,
)
from paintshop.services import analytics
from paintshop.services.consumption import compute_material_consumption
from paintshop.services.production import ProductionService

router = APIRouter(tags=["Analytics"], dependencies=[Depends(get_current_user)])


@dataclass
class ProductionFilters:
    """Date range and shift filters shared by the analytics and report endpoints."""
    start_date: Optional[date]
    end_date: Optional[date]
    shift: Optional[str]


# PUBLIC_INTERFACE
def production_filters(
    startDate: Optional[date] = Query(None, description="First production date (inclusive)"),
    endDate: Optional[date] = Query(None, description="Last production date (inclusive)"),
    shift: Optional[str] = Query(None, description="Shift: 1, 2, 3 or all"),
) -> ProductionFilters:
    return ProductionFilters(start_date=startDate, end_date=endDate, shift=shift)


async def _records(session: AsyncSession, filters: ProductionFilters) -> List[Registro]:
    return await ProductionService(session).load_records(
        start_date=filters.start_date, end_date=filters.end_date, shift=filters.shift
    )


def _target() -> int:
    return get_app_settings().HOURLY_SKID_TARGET


# PUBLIC_INTERFACE
@router.get(
    "/detailed-painting-by-model-color-supabase",
    response_model=List[PaintingByModelColor],
    summary="Painting by model and colour",
    description="Painted quantity per model, colour and Normal/Repintura, largest first.",
)
async def painting_by_model_color(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[PaintingByModelColor]:
    rows = analytics.painting_by_model_color(await _records(session, filters))
    return [PaintingByModelColor(**r) for r in rows]


# PUBLIC_INTERFACE
@router.get(
    "/hourly-production-by-model-supabase",
    response_model=HourlyProductionByModel,
    summary="Hourly production by model",
    description="Pivot of painted quantity per model and slot start hour.",
)
async def hourly_production_by_model(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> HourlyProductionByModel:
    return HourlyProductionByModel(**analytics.hourly_by_model(await _records(session, filters)))


# PUBLIC_INTERFACE
@router.get(
    "/materials-supabase",
    response_model=MaterialConsumptionSummary,
    summary="Material consumption",
    description=(
        "Paint, diluent and catalyst consumption in litres derived from painted parts and the "
        "current consumption configuration."
    ),
)
async def material_consumption(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> MaterialConsumptionSummary:
    records = await _records(session, filters)
    latest = await ConsumptionConfigRepository(session).get_latest()
    summary = compute_material_consumption(
        analytics.production_items(records), latest.configuracao if latest else None
    )
    return MaterialConsumptionSummary(**summary)


# PUBLIC_INTERFACE
@router.get(
    "/dashboard/summary",
    response_model=DashboardSummary,
    summary="Dashboard KPIs",
    description="Downtime, target attainment, repaint rate, MTBF and MTTR for the period.",
)
async def dashboard_summary(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> DashboardSummary:
    return DashboardSummary(**analytics.dashboard_summary(await _records(session, filters), _target()))


# PUBLIC_INTERFACE
@router.get("/dashboard/hourly", response_model=List[HourlyPoint], summary="Skids per slot")
async def dashboard_hourly(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[HourlyPoint]:
    points = analytics.hourly_series(await _records(session, filters), _target())
    return [HourlyPoint(**p) for p in points]


# PUBLIC_INTERFACE
@router.get("/dashboard/s-curve", response_model=List[SCurvePoint], summary="Cumulative production curve")
async def dashboard_s_curve(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[SCurvePoint]:
    points = analytics.s_curve(await _records(session, filters), _target())
    return [SCurvePoint(**p) for p in points]


# PUBLIC_INTERFACE
@router.get("/dashboard/chart-summary", response_model=ChartSummary, summary="Production chart summary")
async def dashboard_chart_summary(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> ChartSummary:
    return ChartSummary(**analytics.chart_summary(await _records(session, filters), _target()))


# PUBLIC_INTERFACE
@router.get(
    "/dashboard/downtime-by-criterio",
    response_model=List[DowntimeByCriterio],
    summary="Downtime by criterio",
)
async def dashboard_downtime_by_criterio(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[DowntimeByCriterio]:
    rows = analytics.downtime_by_criterio(await _records(session, filters))
    return [DowntimeByCriterio(**r) for r in rows]


# PUBLIC_INTERFACE
@router.get(
    "/dashboard/pareto",
    response_model=List[ParetoEntry],
    summary="Downtime Pareto",
    description="Top 10 downtime reasons by frequency, meals and booth cleaning excluded.",
)
async def dashboard_pareto(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[ParetoEntry]:
    return [ParetoEntry(**r) for r in analytics.pareto(await _records(session, filters))]


# PUBLIC_INTERFACE
@router.get("/dashboard/downtime-by-area", response_model=List[DowntimeByArea], summary="Downtime by area")
async def dashboard_downtime_by_area(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[DowntimeByArea]:
    return [DowntimeByArea(**r) for r in analytics.downtime_by_area(await _records(session, filters))]


# PUBLIC_INTERFACE
@router.get("/dashboard/heatmap", response_model=List[HeatmapCell], summary="Downtime heatmap")
async def dashboard_heatmap(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[HeatmapCell]:
    return [HeatmapCell(**r) for r in analytics.heatmap(await _records(session, filters))]


# PUBLIC_INTERFACE
@router.get("/dashboard/top-models", response_model=List[TopModelo], summary="Top painted models")
async def dashboard_top_models(
    filters: ProductionFilters = Depends(production_filters),
    session: AsyncSession = Depends(get_async_session),
) -> List[TopModelo]:
    return [TopModelo(**r) for r in analytics.top_models(await _records(session, filters))]
