"""Item requisitions: visibility per role, manager updates and admin clean-up."""

import pytest


async def _create(client, headers, **overrides):
    payload = {"item_name": "Luvas", "quantity": 10, "priority": "high", "description": "Nitrílica"}
    payload.update(overrides)
    resp = await client.post("/api/item-requests", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def test_create_sets_pending_and_requester(client, operator_headers, operator_user):
    item = await _create(client, operator_headers)
    assert item["status"] == "pending"
    assert item["requested_by"] == str(operator_user.id)
    assert item["requested_by_name"] == "Operador"
    assert item["assigned_to_name"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"quantity": 1, "priority": "low"},
        {"item_name": "  ", "quantity": 1, "priority": "low"},
        {"item_name": "Luvas", "priority": "low"},
        {"item_name": "Luvas", "quantity": 0, "priority": "low"},
        {"item_name": "Luvas", "quantity": 2, "priority": "someday"},
    ],
)
async def test_create_validation(client, operator_headers, payload):
    resp = await client.post("/api/item-requests", json=payload, headers=operator_headers)
    assert resp.status_code == 400


async def test_operator_sees_only_own_requests(
    client, operator_headers, other_operator_headers, manager_headers
):
    await _create(client, operator_headers, item_name="Luvas")
    await _create(client, other_operator_headers, item_name="Máscara")

    own = await client.get("/api/item-requests", headers=operator_headers)
    assert [r["item_name"] for r in own.json()] == ["Luvas"]

    everything = await client.get("/api/item-requests", headers=manager_headers)
    assert {r["item_name"] for r in everything.json()} == {"Luvas", "Máscara"}


async def test_status_filter(client, operator_headers, manager_headers):
    item = await _create(client, operator_headers)
    await _create(client, operator_headers, item_name="Fita")
    await client.put(f"/api/item-requests/{item['id']}", json={"status": "completed"}, headers=manager_headers)

    resp = await client.get("/api/item-requests", params={"status": "pending"}, headers=manager_headers)
    assert [r["item_name"] for r in resp.json()] == ["Fita"]


async def test_get_visibility(client, operator_headers, other_operator_headers, manager_headers):
    item = await _create(client, operator_headers)
    assert (await client.get(f"/api/item-requests/{item['id']}", headers=operator_headers)).status_code == 200
    assert (await client.get(f"/api/item-requests/{item['id']}", headers=manager_headers)).status_code == 200
    assert (await client.get(f"/api/item-requests/{item['id']}", headers=other_operator_headers)).status_code == 403
    assert (await client.get("/api/item-requests/9999", headers=manager_headers)).status_code == 404


async def test_manager_updates_and_assigns(client, operator_headers, manager_headers, manager_user):
    item = await _create(client, operator_headers)
    resp = await client.put(
        f"/api/item-requests/{item['id']}",
        json={"status": "in_progress", "assigned_to": str(manager_user.id)},
        headers=manager_headers,
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "in_progress"
    assert data["assigned_to_name"] == "Gerente"
    assert data["priority"] == "high"


async def test_update_rules(client, operator_headers, manager_headers):
    item = await _create(client, operator_headers)
    forbidden = await client.put(
        f"/api/item-requests/{item['id']}", json={"status": "completed"}, headers=operator_headers
    )
    assert forbidden.status_code == 403

    bad_status = await client.put(
        f"/api/item-requests/{item['id']}", json={"status": "done"}, headers=manager_headers
    )
    assert bad_status.status_code == 400

    missing = await client.put("/api/item-requests/9999", json={"status": "completed"}, headers=manager_headers)
    assert missing.status_code == 404


async def test_unknown_assignee_is_rejected(client, operator_headers, manager_headers):
    item = await _create(client, operator_headers)
    resp = await client.put(
        f"/api/item-requests/{item['id']}",
        json={"assigned_to": "00000000-0000-4000-8000-000000000001"},
        headers=manager_headers,
    )
    assert resp.status_code == 400
    assert "assigned_to" in resp.json()["error"]["message"]

    unchanged = await client.get(f"/api/item-requests/{item['id']}", headers=manager_headers)
    assert unchanged.json()["assigned_to"] is None


async def test_delete_is_admin_only(client, operator_headers, manager_headers, admin_headers):
    item = await _create(client, operator_headers)
    assert (await client.delete(f"/api/item-requests/{item['id']}", headers=manager_headers)).status_code == 403
    assert (await client.delete(f"/api/item-requests/{item['id']}", headers=admin_headers)).status_code == 200
    assert (await client.delete(f"/api/item-requests/{item['id']}", headers=admin_headers)).status_code == 404


async def test_clear_all(client, operator_headers, admin_headers, manager_headers):
    await _create(client, operator_headers)
    await _create(client, operator_headers, item_name="Fita")

    assert (await client.delete("/api/item-requests/clear-all", headers=manager_headers)).status_code == 403
    resp = await client.delete("/api/item-requests/clear-all", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["deletedCount"] == 2
    assert (await client.get("/api/item-requests", headers=admin_headers)).json() == []


async def test_count_pending(client, operator_headers, manager_headers):
    item = await _create(client, operator_headers)
    await _create(client, operator_headers, item_name="Fita")
    await client.put(f"/api/item-requests/{item['id']}", json={"status": "cancelled"}, headers=manager_headers)

    resp = await client.get("/api/item-requests/count/pending", headers=operator_headers)
    assert resp.json() == {"count": 1}


async def test_recent(client, operator_headers):
    await _create(client, operator_headers)

    past = await client.get(
        "/api/item-requests/recent", params={"created_after": "2000-01-01T00:00:00Z"}, headers=operator_headers
    )
    assert len(past.json()) == 1

    future = await client.get(
        "/api/item-requests/recent", params={"created_after": "2999-01-01T00:00:00Z"}, headers=operator_headers
    )
    assert future.json() == []


async def test_recent_validation(client, operator_headers):
    missing = await client.get("/api/item-requests/recent", headers=operator_headers)
    assert missing.status_code == 400
    invalid = await client.get(
        "/api/item-requests/recent", params={"created_after": "ontem"}, headers=operator_headers
    )
    assert invalid.status_code == 400


async def test_requester_deletion_cascades(client, operator_headers, admin_headers, operator_user):
    await _create(client, operator_headers)
    await client.delete(f"/api/users/{operator_user.id}", headers=admin_headers)
    assert (await client.get("/api/item-requests", headers=admin_headers)).json() == []
