"""Dashboard aggregations over in-memory production records."""

from datetime import date

from paintshop.db.models.production import Registro
from paintshop.services import analytics


def _registro(day, hora, skids=0, vazios=0, paradas=None, producao=None):
    return Registro(
        data=date(2024, 3, day),
        hora=hora,
        skids=skids,
        skids_vazios=vazios,
        paradas=paradas or [],
        producao=producao or [],
    )


def _stop(tipo, tempo, criterio=""):
    return {"tipo": tipo, "tempo": tempo, "criterio": criterio, "descricao": ""}


def _item(modelo, cor, qtd, repintura=False):
    return {"modelo": modelo, "cor": cor, "qtd": qtd, "repintura": repintura}


def test_js_round_rounds_half_up():
    assert analytics.js_round(2.5) == 3
    assert analytics.js_round(2.49) == 2
    assert analytics.js_round(-0.5) == 0


# ─── dashboard summary ───────────────────────────────────────────

def test_dashboard_summary_kpis():
    records = [
        _registro(
            1,
            "06h00 - 07h00",
            skids=40,
            vazios=2,
            paradas=[_stop("SKID TRAVADO", 10, "MANUTENÇÃO"), _stop("REFEIÇÃO", 30, "GESTÃO")],
            producao=[_item("Grade Virtus", "Preto", 30), _item("Spoiler", "Branco", 10, True)],
        ),
        _registro(
            1,
            "07h00 - 08h00",
            skids=50,
            paradas=[_stop("CORRENTE QUEBRADA", 20, "MANUTENÇÃO")],
        ),
    ]
    summary = analytics.dashboard_summary(records, target=50)

    assert summary["tempoTotalParada"] == 30
    assert summary["percentualParada"] == 25
    assert summary["totalSkids"] == 90
    # 2 slots * 50 minus 30 min of meals (25 skids)
    assert summary["acumuladoHoraHora"] == 75
    assert summary["percentualMeta"] == 120
    assert summary["skidsVazios"] == 2
    assert summary["quantidadeRepintura"] == 10
    assert summary["percentualRepintura"] == 25
    assert summary["mttr"] == 15
    assert summary["mtbf"] == 54
    assert summary["acumuladoProduzido"] == 90


def test_dashboard_summary_empty_period_is_all_zero():
    summary = analytics.dashboard_summary([], target=50)
    assert summary["percentualParada"] == 0
    assert summary["percentualMeta"] == 0
    assert summary["mtbf"] == 0
    assert summary["mttr"] == 0
    assert summary["acumuladoHoraHora"] == 0


# ─── series ──────────────────────────────────────────────────────

def test_hourly_series_sorted_by_date_and_slot_start():
    records = [
        _registro(2, "06h00 - 07h00", skids=5),
        _registro(1, "10h00 - 11h00", skids=3),
        _registro(1, "08h00 - 09h00", skids=4),
    ]
    series = analytics.hourly_series(records, target=50)
    assert [p["production"] for p in series] == [4, 3, 5]
    assert all(p["target"] == 50 and p["records"] == 1 for p in series)


def test_s_curve_accumulates_production_and_target():
    records = [_registro(1, "06h00 - 07h00", skids=40), _registro(1, "07h00 - 08h00", skids=45)]
    curve = analytics.s_curve(records, target=50)
    assert [(p["cumulative"], p["target"]) for p in curve] == [(40, 50), (85, 100)]
    assert curve[1]["timeSlot"] == "07h00 - 08h00"


def test_chart_summary():
    records = [_registro(1, "06h00 - 07h00", skids=40), _registro(1, "07h00 - 08h00", skids=45)]
    assert analytics.chart_summary(records, target=50) == {
        "totalProduction": 85,
        "averageHourlyRate": 42.5,
        "targetRate": 50,
    }


# ─── downtime breakdowns ─────────────────────────────────────────

def test_downtime_by_criterio_excludes_planned_stops():
    records = [
        _registro(
            1,
            "06h00 - 07h00",
            paradas=[
                _stop("SKID TRAVADO", 10, "manutenção"),
                _stop("FALHA NO ELEVADOR", 5, "MANUTENÇÃO"),
                _stop("LIMPEZA DA CABINE", 15, "PINTURA"),
                _stop("SEM CRITERIO", 7, ""),
            ],
        )
    ]
    assert analytics.downtime_by_criterio(records) == [{"criterio": "MANUTENÇÃO", "tempo": 15}]


def test_pareto_orders_by_frequency_and_limits():
    paradas = [_stop(f"MOTIVO {i}", 1) for i in range(12)] + [_stop("MOTIVO 3", 4), _stop("MOTIVO 3", 4)]
    rows = analytics.pareto([_registro(1, "06h00 - 07h00", paradas=paradas)])
    assert len(rows) == 10
    assert rows[0] == {"reason": "MOTIVO 3", "frequency": 3, "total_duration": 9}


def test_downtime_by_area_counts_every_timed_stop():
    records = [
        _registro(
            1,
            "06h00 - 07h00",
            paradas=[
                _stop("REFEIÇÃO", 30, "GESTÃO"),
                _stop("SKID TRAVADO", 10, ""),
                _stop("CORRENTE QUEBRADA", 5, "MANUTENÇÃO"),
                _stop("SEM TEMPO", 0, "MANUTENÇÃO"),
            ],
        )
    ]
    rows = analytics.downtime_by_area(records)
    assert rows[0] == {"area": "🔧 Manutenção", "frequency": 2, "total_duration": 15}
    assert {"area": "👥 Gestão", "frequency": 1, "total_duration": 30} in rows


def test_heatmap_groups_by_date_and_slot():
    records = [
        _registro(1, "06h00 - 07h00", paradas=[_stop("SKID TRAVADO", 10), _stop("SKID TRAVADO", 5)]),
        _registro(1, "07h00 - 08h00", paradas=[_stop("REFEIÇÃO", 30)]),
    ]
    cells = analytics.heatmap(records)
    assert len(cells) == 1
    cell = cells[0]
    assert cell["date"] == "2024-03-01"
    assert cell["time_slot"] == "06h00 - 07h00"
    assert cell["total_frequency"] == 2
    assert cell["total_duration"] == 15
    assert cell["reasons"] == [{"reason": "SKID TRAVADO", "frequency": 2, "duration": 15}]


# ─── painted parts ───────────────────────────────────────────────

def test_painting_by_model_color_splits_repaint_and_skips_zero():
    records = [
        _registro(
            1,
            "06h00 - 07h00",
            producao=[
                _item("Spoiler", "Preto", 5),
                _item("Spoiler", "Preto", 3, True),
                _item("Spoiler", "Preto", 2),
                _item("Aerofólio", "Branco", 0),
            ],
        )
    ]
    assert analytics.painting_by_model_color(records) == [
        {"modelo": "Spoiler", "cor": "Preto", "quantidade": 7, "tipo": "Normal"},
        {"modelo": "Spoiler", "cor": "Preto", "quantidade": 3, "tipo": "Repintura"},
    ]


def test_hourly_by_model_pivots_on_start_hour():
    records = [
        _registro(1, "06h00 - 07h00", producao=[_item("Spoiler", "Preto", 5)]),
        _registro(1, "08h00 - 09h00", producao=[_item("Spoiler", "Preto", 2), _item("Aerofólio", "Preto", 9)]),
        _registro(1, "sem hora", producao=[_item("Spoiler", "Preto", 100)]),
    ]
    result = analytics.hourly_by_model(records)
    assert result["availableHours"] == [6, 8]
    assert result["data"] == [
        {"modelo": "Aerofólio", "h06": 0, "h08": 9, "total": 9},
        {"modelo": "Spoiler", "h06": 5, "h08": 2, "total": 7},
    ]


def test_top_models_joins_model_and_colour():
    records = [
        _registro(1, "06h00 - 07h00", producao=[_item("Spoiler", "Preto", 5), _item("Spoiler", "Branco", 8)]),
        _registro(1, "07h00 - 08h00", producao=[_item("Spoiler", "Preto", 4)]),
    ]
    assert analytics.top_models(records) == [
        {"modelo": "Spoiler - Preto", "quantidade": 9},
        {"modelo": "Spoiler - Branco", "quantidade": 8},
    ]


def test_filter_by_shift():
    records = [_registro(1, "06h00 - 07h00"), _registro(1, "16h00 - 17h00"), _registro(1, "02h00 - 03h00")]
    assert [r.hora for r in analytics.filter_by_shift(records, "2")] == ["16h00 - 17h00"]
    assert len(analytics.filter_by_shift(records, "all")) == 3
