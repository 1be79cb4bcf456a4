"""Consumption configuration, material settings and per-model consumption."""


async def test_config_defaults_when_nothing_stored(client, operator_headers):
    resp = await client.get("/api/configuracao-consumo", headers=operator_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == "default"
    assert body["configuracao"]["modoTaxa"] == "sobreTotal"


async def test_config_create_update_and_latest_wins(client, operator_headers):
    created = await client.post(
        "/api/configuracao-consumo", json={"configuracao": {"modoTaxa": "porComponente"}}, headers=operator_headers
    )
    assert created.status_code == 201
    config_id = created.json()["id"]

    updated = await client.put(
        "/api/configuracao-consumo",
        json={"id": config_id, "configuracao": {"modoTaxa": "sobreTotal", "bases": {}}},
        headers=operator_headers,
    )
    assert updated.status_code == 200

    current = await client.get("/api/configuracao-consumo", headers=operator_headers)
    assert current.json()["id"] == config_id
    assert current.json()["configuracao"] == {"modoTaxa": "sobreTotal", "bases": {}}


async def test_config_validation(client, operator_headers):
    missing = await client.post("/api/configuracao-consumo", json={}, headers=operator_headers)
    assert missing.status_code == 400

    no_id = await client.put("/api/configuracao-consumo", json={"configuracao": {}}, headers=operator_headers)
    assert no_id.status_code == 400

    unknown = await client.put(
        "/api/configuracao-consumo",
        json={"id": "00000000-0000-0000-0000-000000000000", "configuracao": {}},
        headers=operator_headers,
    )
    assert unknown.status_code == 404


async def test_config_reset_stores_default(client, operator_headers):
    resp = await client.post("/api/configuracao-consumo/reset", headers=operator_headers)
    assert resp.status_code == 200
    stored_id = resp.json()["data"]["id"]
    current = await client.get("/api/configuracao-consumo", headers=operator_headers)
    assert current.json()["id"] == stored_id
    assert current.json()["configuracao"]["bases"]["Preto"]["taxa_diluicao"] == 41


async def test_material_setting_upsert_is_keyed_by_name(client, operator_headers):
    first = await client.post(
        "/api/material-settings",
        json={"material_name": "verniz", "dilution_rate": 20, "diluent_type": "diluente_verniz"},
        headers=operator_headers,
    )
    assert first.status_code == 200
    assert first.json()["catalyst_rate"] == 0

    second = await client.post(
        "/api/material-settings",
        json={"material_name": "verniz", "dilution_rate": 25, "catalyst_rate": 8},
        headers=operator_headers,
    )
    assert second.json()["id"] == first.json()["id"]

    listing = await client.get("/api/material-settings", headers=operator_headers)
    assert len(listing.json()) == 1
    assert listing.json()[0]["dilution_rate"] == 25
    assert listing.json()[0]["catalyst_rate"] == 8


async def test_material_setting_requires_name(client, operator_headers):
    resp = await client.post("/api/material-settings", json={"dilution_rate": 5}, headers=operator_headers)
    assert resp.status_code == 400


async def test_material_settings_reset_replaces_rows(client, operator_headers):
    await client.post("/api/material-settings", json={"material_name": "custom"}, headers=operator_headers)
    resp = await client.post("/api/material-settings/reset", headers=operator_headers)
    assert resp.status_code == 200
    assert len(resp.json()["inserted"]) == 10

    names = [r["material_name"] for r in (await client.get("/api/material-settings", headers=operator_headers)).json()]
    assert "custom" not in names
    assert "verniz" in names


async def test_material_setting_update_and_delete(client, operator_headers):
    created = await client.post(
        "/api/material-settings", json={"material_name": "primer", "dilution_rate": 10}, headers=operator_headers
    )
    setting_id = created.json()["id"]

    updated = await client.put(
        f"/api/material-settings/{setting_id}", json={"catalyst_rate": 3}, headers=operator_headers
    )
    assert updated.status_code == 200
    assert updated.json()["catalyst_rate"] == 3
    assert updated.json()["dilution_rate"] == 10

    deleted = await client.delete(f"/api/material-settings/{setting_id}", headers=operator_headers)
    assert deleted.status_code == 200
    missing = await client.put(
        f"/api/material-settings/{setting_id}", json={"catalyst_rate": 1}, headers=operator_headers
    )
    assert missing.status_code == 404


async def test_model_consumption_upsert_get_delete(client, operator_headers):
    payload = {"model": "Spoiler", "color": "Preto", "primer_ml_per_piece": 49.5}
    first = await client.post("/api/model-material-consumption", json=payload, headers=operator_headers)
    assert first.status_code == 200
    assert first.json()["base_ml_per_piece"] == 0

    second = await client.post(
        "/api/model-material-consumption", json={**payload, "base_ml_per_piece": 78.3}, headers=operator_headers
    )
    entry_id = second.json()["id"]
    assert entry_id == first.json()["id"]

    fetched = await client.get(f"/api/model-material-consumption/{entry_id}", headers=operator_headers)
    assert fetched.json()["base_ml_per_piece"] == 78.3

    listing = await client.get("/api/model-material-consumption", headers=operator_headers)
    assert len(listing.json()) == 1

    deleted = await client.delete(f"/api/model-material-consumption/{entry_id}", headers=operator_headers)
    assert deleted.status_code == 200
    gone = await client.get(f"/api/model-material-consumption/{entry_id}", headers=operator_headers)
    assert gone.status_code == 404


async def test_model_consumption_requires_model_and_color(client, operator_headers):
    resp = await client.post("/api/model-material-consumption", json={"model": "Spoiler"}, headers=operator_headers)
    assert resp.status_code == 400


async def test_materials_require_authentication(client):
    resp = await client.get("/api/material-settings")
    assert resp.status_code == 401
