"""Hourly production records and the dashboard endpoints built on them."""

import pytest


def _payload(**overrides):
    payload = {
        "selectedTime": "06h00 - 07h00",
        "shift": "1",
        "skidsProduced": 40,
        "emptySkids": 2,
        "targetDate": "2024-03-01",
        "downtimes": [
            {"reason": "SKID TRAVADO", "duration": "10", "description": "corrente"},
            {"reason": "REFEIÇÃO", "duration": 30},
        ],
        "productions": [
            {"model": "Spoiler", "color": "Preto", "quantity": "12", "isRepaint": False},
            {"model": "Aerofólio", "color": "Preto", "quantity": 4, "isRepaint": True},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def record(client, operator_headers):
    resp = await client.post("/api/production-records", json=_payload(), headers=operator_headers)
    assert resp.status_code == 200
    return resp.json()["data"]


async def test_requires_authentication(client):
    resp = await client.get("/api/production-records")
    assert resp.status_code == 401


async def test_create_stores_paradas_with_area(record):
    assert record["data"] == "2024-03-01"
    assert record["hora"] == "06h00 - 07h00"
    assert record["skids"] == 40
    assert record["skids_vazios"] == 2
    assert record["paradas"][0] == {
        "tipo": "SKID TRAVADO",
        "tempo": 10,
        "criterio": "MANUTENÇÃO",
        "descricao": "corrente",
    }
    assert record["paradas"][1]["criterio"] == "GESTÃO"
    assert record["producao"][0] == {"modelo": "Spoiler", "cor": "Preto", "qtd": 12, "repintura": False}


async def test_duplicate_slot_conflicts(client, operator_headers, record):
    resp = await client.post("/api/production-records", json=_payload(), headers=operator_headers)
    assert resp.status_code == 409


async def test_missing_required_fields_is_bad_request(client, operator_headers):
    resp = await client.post(
        "/api/production-records", json=_payload(selectedTime=""), headers=operator_headers
    )
    assert resp.status_code == 400


async def test_zero_skids_is_accepted(client, operator_headers):
    resp = await client.post(
        "/api/production-records", json=_payload(skidsProduced=0), headers=operator_headers
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["skids"] == 0


async def test_get_detail(client, operator_headers, record):
    resp = await client.get(f"/api/production-records/{record['id']}", headers=operator_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["shift"] == "Turno 1"
    assert body["time_slot"] == "06h00 - 07h00"
    assert body["created_at"].startswith("2024-03-01T06:00")
    assert body["downtimes"][0]["id"] == f"{record['id']}-SKID TRAVADO"
    assert body["downtimes"][0]["criterio"] == "MANUTENÇÃO"


async def test_get_missing_record(client, operator_headers):
    resp = await client.get(
        "/api/production-records/00000000-0000-0000-0000-000000000000", headers=operator_headers
    )
    assert resp.status_code == 404


async def test_list_filters_by_date_and_shift(client, operator_headers, record):
    await client.post(
        "/api/production-records",
        json=_payload(selectedTime="16h00 - 17h00", skidsProduced=30),
        headers=operator_headers,
    )
    await client.post(
        "/api/production-records",
        json=_payload(targetDate="2024-03-05"),
        headers=operator_headers,
    )

    all_rows = await client.get("/api/production-records", headers=operator_headers)
    assert len(all_rows.json()) == 3
    assert all_rows.json()[0]["created_at"].startswith("2024-03-05")

    shift_two = await client.get(
        "/api/production-records", params={"shift": "2"}, headers=operator_headers
    )
    assert [r["time_slot"] for r in shift_two.json()] == ["16h00 - 17h00"]

    ranged = await client.get(
        "/api/production-records",
        params={"startDate": "2024-03-01", "endDate": "2024-03-01"},
        headers=operator_headers,
    )
    assert len(ranged.json()) == 2


async def test_update_moves_slot_and_detects_clash(client, operator_headers, record):
    other = await client.post(
        "/api/production-records",
        json=_payload(selectedTime="07h00 - 08h00"),
        headers=operator_headers,
    )
    other_id = other.json()["data"]["id"]

    clash = await client.put(
        f"/api/production-records/{other_id}", json=_payload(), headers=operator_headers
    )
    assert clash.status_code == 409

    same_slot = await client.put(
        f"/api/production-records/{record['id']}",
        json=_payload(skidsProduced=45, downtimes=[{"reason": "SETUP DE COR", "duration": 5}]),
        headers=operator_headers,
    )
    assert same_slot.status_code == 200
    data = same_slot.json()["data"]
    assert data["skids"] == 45
    assert data["paradas"] == [{"tipo": "SETUP DE COR", "tempo": 5, "criterio": "SETUP", "descricao": ""}]


async def test_delete_record(client, operator_headers, record):
    resp = await client.delete(f"/api/production-records/{record['id']}", headers=operator_headers)
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    again = await client.delete(f"/api/production-records/{record['id']}", headers=operator_headers)
    assert again.status_code == 404


# ─── dashboard endpoints over stored records ─────────────────────

async def test_dashboard_summary_endpoint(client, operator_headers, record):
    resp = await client.get("/api/dashboard/summary", headers=operator_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalSkids"] == 40
    assert body["tempoTotalParada"] == 10
    assert body["quantidadeRepintura"] == 4
    assert body["percentualRepintura"] == 25


async def test_dashboard_series_endpoints(client, operator_headers, record):
    hourly = await client.get("/api/dashboard/hourly", headers=operator_headers)
    assert hourly.json() == [{"time": "06h00 - 07h00", "production": 40, "target": 50, "records": 1}]

    curve = await client.get("/api/dashboard/s-curve", headers=operator_headers)
    assert curve.json()[0]["cumulative"] == 40

    summary = await client.get("/api/dashboard/chart-summary", headers=operator_headers)
    assert summary.json()["totalProduction"] == 40


async def test_downtime_endpoints(client, operator_headers, record):
    criterio = await client.get("/api/dashboard/downtime-by-criterio", headers=operator_headers)
    assert criterio.json() == [{"criterio": "MANUTENÇÃO", "tempo": 10}]

    pareto = await client.get("/api/dashboard/pareto", headers=operator_headers)
    assert [r["reason"] for r in pareto.json()] == ["SKID TRAVADO"]

    area = await client.get("/api/dashboard/downtime-by-area", headers=operator_headers)
    assert {r["area"] for r in area.json()} == {"🔧 Manutenção", "👥 Gestão"}

    heatmap = await client.get("/api/dashboard/heatmap", headers=operator_headers)
    assert heatmap.json()[0]["total_duration"] == 10


async def test_painting_and_top_models_endpoints(client, operator_headers, record):
    painting = await client.get("/api/detailed-painting-by-model-color-supabase", headers=operator_headers)
    assert painting.json()[0] == {"modelo": "Spoiler", "cor": "Preto", "quantidade": 12, "tipo": "Normal"}

    hourly = await client.get("/api/hourly-production-by-model-supabase", headers=operator_headers)
    assert hourly.json()["availableHours"] == [6]

    top = await client.get("/api/dashboard/top-models", headers=operator_headers)
    assert top.json()[0] == {"modelo": "Spoiler - Preto", "quantidade": 12}


async def test_materials_endpoint_uses_default_configuration(client, operator_headers, record):
    resp = await client.get("/api/materials-supabase", headers=operator_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalPecasPintadas"] == 16
    assert body["totalComponentes"] == 16
    assert float(body["consumoDetalhado"]["primer"]) > 0


async def test_shift_filter_applies_to_dashboard(client, operator_headers, record):
    resp = await client.get("/api/dashboard/summary", params={"shift": "3"}, headers=operator_headers)
    assert resp.json()["totalSkids"] == 0
