from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class PaintingByModelColor(BaseModel):
    """Quantity painted per model, colour and paint type (Normal/Repintura)."""
    modelo: str
    cor: str
    quantidade: int
    tipo: str


class HourlyProductionByModel(BaseModel):
    """Pivot of quantity per model and slot start hour (keys hHH plus total)."""
    data: List[Dict[str, Any]] = Field(default_factory=list)
    availableHours: List[int] = Field(default_factory=list)


class CorConsumo(BaseModel):
    nome: str
    consumo: str


class ConsumoDetalhado(BaseModel):
    """Litres per material; strings with two decimals."""
    primer: str
    base: str
    verniz: str
    cores: List[CorConsumo] = Field(default_factory=list)
    catalisador: str
    diluentePrimer: str
    diluenteBase: str
    diluenteVerniz: str


class TopModeloCor(BaseModel):
    modelo: str
    cor: str
    quantidade: int


class TopCor(BaseModel):
    cor: str
    quantidade: int


class TopModelo(BaseModel):
    modelo: str
    quantidade: int


class MaterialConsumptionSummary(BaseModel):
    """Paint consumption derived from production and the consumption configuration."""
    totalPecasPintadas: int
    totalChoques: int
    totalComponentes: int
    consumoTotalMaterial: float
    consumoTotalDiluentes: float
    consumoDetalhado: ConsumoDetalhado
    topModelos: List[TopModeloCor] = Field(default_factory=list)
    topCores: List[TopCor] = Field(default_factory=list)
    topModelosGrafico: List[TopModelo] = Field(default_factory=list)


class DashboardSummary(BaseModel):
    """Line KPIs for the selected period."""
    tempoTotalParada: int = Field(..., description="Downtime minutes, excluding meals and booth cleaning")
    percentualParada: int
    totalSkids: int
    percentualMeta: int
    skidsVazios: int
    percentualRepintura: int
    quantidadeRepintura: int
    mtbf: int = Field(..., description="Mean minutes between maintenance stops")
    mttr: int = Field(..., description="Mean minutes to repair")
    acumuladoHoraHora: int = Field(..., description="Adjusted skid target")
    acumuladoProduzido: int


class HourlyPoint(BaseModel):
    time: str
    production: int
    target: int
    records: int = 1


class SCurvePoint(BaseModel):
    time: str
    cumulative: int
    target: int
    production: int
    timeSlot: str


class ChartSummary(BaseModel):
    totalProduction: int
    averageHourlyRate: float
    targetRate: int


class DowntimeByCriterio(BaseModel):
    criterio: str
    tempo: int


class ParetoEntry(BaseModel):
    reason: str
    frequency: int
    total_duration: int


class DowntimeByArea(BaseModel):
    area: str
    frequency: int
    total_duration: int


class HeatmapReason(BaseModel):
    reason: str
    frequency: int
    duration: int


class HeatmapCell(BaseModel):
    date: str
    time_slot: str
    total_frequency: int
    total_duration: int
    reasons: List[HeatmapReason] = Field(default_factory=list)
