"""
Aggregations over hourly production records for the dashboard charts.

All functions take records in chronological order (data asc, hora asc),
already filtered by date range and shift, and return plain dicts shaped like
the response schemas in paintshop.schemas.analytics.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from paintshop.db.models.production import Registro
from paintshop.services.classification import (
    MAINTENANCE_CRITERIO,
    area_label,
    is_excluded_downtime,
    matches_shift,
    slot_start_hour,
)

DEFAULT_HOURLY_TARGET = 50


def js_round(value: float) -> int:
    """Round half up, matching the dashboard UI."""
    return int(math.floor(value + 0.5))


# PUBLIC_INTERFACE
def filter_by_shift(records: Iterable[Registro], shift: str | None) -> List[Registro]:
    """Keep the records whose slot belongs to the shift filter."""
    return [r for r in records if matches_shift(r.hora, shift)]


def _stops(record: Registro) -> List[Dict[str, Any]]:
    return [p for p in (record.paradas or []) if isinstance(p, dict)]


def _items(record: Registro) -> List[Dict[str, Any]]:
    return [p for p in (record.producao or []) if isinstance(p, dict)]


def _tempo(stop: Dict[str, Any]) -> int:
    try:
        return int(stop.get("tempo") or 0)
    except (TypeError, ValueError):
        return 0


def _qtd(item: Dict[str, Any]) -> int:
    try:
        return int(item.get("qtd") or 0)
    except (TypeError, ValueError):
        return 0


def _counted_stops(records: Iterable[Registro]):
    """Yield (record, stop) for stops with a type and duration that are not planned."""
    for record in records:
        for stop in _stops(record):
            if stop.get("tipo") and _tempo(stop) and not is_excluded_downtime(stop.get("tipo")):
                yield record, stop


# PUBLIC_INTERFACE
def painting_by_model_color(records: Iterable[Registro]) -> List[Dict[str, Any]]:
    """Sum painted quantities per (modelo, cor, Normal/Repintura), largest first."""
    totals: Dict[Tuple[str, str, str], int] = defaultdict(int)
    for record in records:
        for item in _items(record):
            qtd = _qtd(item)
            if qtd <= 0:
                continue
            tipo = "Repintura" if item.get("repintura") else "Normal"
            totals[(item.get("modelo") or "", item.get("cor") or "", tipo)] += qtd
    rows = [
        {"modelo": modelo, "cor": cor, "quantidade": qtd, "tipo": tipo}
        for (modelo, cor, tipo), qtd in totals.items()
    ]
    rows.sort(key=lambda r: r["quantidade"], reverse=True)
    return rows


# PUBLIC_INTERFACE
def hourly_by_model(records: Iterable[Registro]) -> Dict[str, Any]:
    """
    Pivot painted quantities by model and slot start hour.

    Each row has the model, one hHH key per available hour (0 when the model
    had nothing in that hour) and the row total.
    """
    by_model: Dict[str, Dict[int, int]] = {}
    hours = set()
    for record in records:
        hour = slot_start_hour(record.hora)
        if hour is None:
            continue
        hours.add(hour)
        for item in _items(record):
            per_hour = by_model.setdefault(item.get("modelo") or "", defaultdict(int))
            per_hour[hour] += _qtd(item)

    available = sorted(hours)
    data = []
    for modelo, per_hour in by_model.items():
        row: Dict[str, Any] = {"modelo": modelo}
        total = 0
        for hour in available:
            qty = per_hour.get(hour, 0)
            row[f"h{hour:02d}"] = qty
            total += qty
        row["total"] = total
        data.append(row)
    data.sort(key=lambda r: r["total"], reverse=True)
    return {"data": data, "availableHours": available}


# PUBLIC_INTERFACE
def dashboard_summary(records: Sequence[Registro], target: int = DEFAULT_HOURLY_TARGET) -> Dict[str, int]:
    """
    Compute the line KPIs.

    Meals and booth cleaning are left out of the downtime total; their minutes
    reduce the skid target instead. MTBF and MTTR only consider stops whose
    criterio is MANUTENÇÃO.
    """
    downtime = excluded_minutes = 0
    total_skids = empty_skids = 0
    parts = repaint = 0
    maintenance_minutes = maintenance_stops = 0

    for record in records:
        total_skids += record.skids or 0
        empty_skids += record.skids_vazios or 0
        for stop in _stops(record):
            tempo = _tempo(stop)
            if not tempo:
                continue
            if is_excluded_downtime(stop.get("tipo")):
                excluded_minutes += tempo
            else:
                downtime += tempo
            if (stop.get("criterio") or "").upper() == MAINTENANCE_CRITERIO:
                maintenance_minutes += tempo
                maintenance_stops += 1
        for item in _items(record):
            qtd = _qtd(item)
            parts += qtd
            if item.get("repintura"):
                repaint += qtd

    hours = len(records)
    meta_total = hours * target - js_round(excluded_minutes / 60 * target)
    return {
        "tempoTotalParada": downtime,
        "percentualParada": js_round(downtime / (hours * 60) * 100) if hours else 0,
        "totalSkids": total_skids,
        "percentualMeta": js_round(total_skids / meta_total * 100) if meta_total > 0 else 0,
        "skidsVazios": empty_skids,
        "percentualRepintura": js_round(repaint / parts * 100) if parts else 0,
        "quantidadeRepintura": repaint,
        "mtbf": js_round((total_skids / target * 60) / maintenance_stops) if maintenance_stops else 0,
        "mttr": js_round(maintenance_minutes / maintenance_stops) if maintenance_stops else 0,
        "acumuladoHoraHora": meta_total,
        "acumuladoProduzido": total_skids,
    }


# PUBLIC_INTERFACE
def hourly_series(records: Iterable[Registro], target: int = DEFAULT_HOURLY_TARGET) -> List[Dict[str, Any]]:
    """Skids per slot in chronological order."""
    ordered = sorted(records, key=lambda r: (r.data, slot_start_hour(r.hora) or 0))
    return [
        {"time": r.hora, "production": r.skids or 0, "target": target, "records": 1}
        for r in ordered
    ]


# PUBLIC_INTERFACE
def s_curve(records: Iterable[Registro], target: int = DEFAULT_HOURLY_TARGET) -> List[Dict[str, Any]]:
    """Cumulative production against the cumulative target."""
    cumulative = cumulative_target = 0
    points = []
    for point in hourly_series(records, target):
        cumulative += point["production"]
        cumulative_target += point["target"]
        points.append(
            {
                "time": point["time"],
                "cumulative": cumulative,
                "target": cumulative_target,
                "production": point["production"],
                "timeSlot": point["time"],
            }
        )
    return points


# PUBLIC_INTERFACE
def chart_summary(records: Iterable[Registro], target: int = DEFAULT_HOURLY_TARGET) -> Dict[str, Any]:
    series = hourly_series(records, target)
    total = sum(p["production"] for p in series)
    return {
        "totalProduction": total,
        "averageHourlyRate": total / len(series) if series else 0,
        "targetRate": target,
    }


# PUBLIC_INTERFACE
def downtime_by_criterio(records: Iterable[Registro]) -> List[Dict[str, Any]]:
    """Downtime minutes per upper-cased criterio, planned stops excluded."""
    totals: Dict[str, int] = {}
    for _, stop in _counted_stops(records):
        criterio = (stop.get("criterio") or "").upper()
        if not criterio:
            continue
        totals[criterio] = totals.get(criterio, 0) + _tempo(stop)
    return [{"criterio": c, "tempo": t} for c, t in totals.items()]


# PUBLIC_INTERFACE
def pareto(records: Iterable[Registro], limit: int = 10) -> List[Dict[str, Any]]:
    """Most frequent downtime reasons."""
    stats: Dict[str, List[int]] = {}
    for _, stop in _counted_stops(records):
        entry = stats.setdefault(stop["tipo"], [0, 0])
        entry[0] += 1
        entry[1] += _tempo(stop)
    rows = [
        {"reason": reason, "frequency": freq, "total_duration": duration}
        for reason, (freq, duration) in stats.items()
    ]
    rows.sort(key=lambda r: r["frequency"], reverse=True)
    return rows[:limit]


# PUBLIC_INTERFACE
def downtime_by_area(records: Iterable[Registro]) -> List[Dict[str, Any]]:
    """Stops per responsible area; every stop with a duration counts."""
    stats: Dict[str, List[int]] = {}
    for record in records:
        for stop in _stops(record):
            tempo = _tempo(stop)
            if not tempo:
                continue
            entry = stats.setdefault(area_label(stop.get("criterio"), stop.get("tipo")), [0, 0])
            entry[0] += 1
            entry[1] += tempo
    rows = [
        {"area": area, "frequency": freq, "total_duration": duration}
        for area, (freq, duration) in stats.items()
    ]
    rows.sort(key=lambda r: r["frequency"], reverse=True)
    return rows


# PUBLIC_INTERFACE
def heatmap(records: Iterable[Registro]) -> List[Dict[str, Any]]:
    """Downtime per (date, slot) with a breakdown by reason."""
    cells: Dict[Tuple[str, str], Dict[str, List[int]]] = {}
    for record, stop in _counted_stops(records):
        key = (record.data.isoformat(), record.hora)
        reason = cells.setdefault(key, {}).setdefault(stop["tipo"], [0, 0])
        reason[0] += 1
        reason[1] += _tempo(stop)

    rows = []
    for (day, slot), reasons in sorted(cells.items()):
        breakdown = [
            {"reason": name, "frequency": freq, "duration": duration}
            for name, (freq, duration) in reasons.items()
        ]
        rows.append(
            {
                "date": day,
                "time_slot": slot,
                "total_frequency": sum(r["frequency"] for r in breakdown),
                "total_duration": sum(r["duration"] for r in breakdown),
                "reasons": breakdown,
            }
        )
    return rows


# PUBLIC_INTERFACE
def top_models(records: Iterable[Registro], limit: int = 10) -> List[Dict[str, Any]]:
    """Largest painted quantities per 'modelo - cor'."""
    totals: Dict[str, int] = {}
    for record in records:
        for item in _items(record):
            key = f"{item.get('modelo')} - {item.get('cor')}"
            totals[key] = totals.get(key, 0) + _qtd(item)
    rows = [{"modelo": k, "quantidade": v} for k, v in totals.items()]
    rows.sort(key=lambda r: r["quantidade"], reverse=True)
    return rows[:limit]


# PUBLIC_INTERFACE
def production_items(records: Iterable[Registro]) -> List[Dict[str, Any]]:
    """Flatten the producao entries of the records, in record order."""
    return [item for record in records for item in _items(record)]
