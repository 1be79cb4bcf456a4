"""8D reports: discipline status rules and the report endpoints."""

from datetime import date

import pytest

from paintshop.db.models.quality import FiveWhysAnalysis, Form8DDiscipline
from paintshop.services.quality import effective_discipline_status

TODAY = date(2024, 6, 10)


# ─── discipline status rules ─────────────────────────────────────

def _effective(discipline_id, stored=None, has_ishikawa=False, five_whys=None):
    return effective_discipline_status(
        discipline_id, stored, has_ishikawa=has_ishikawa, five_whys=five_whys, today=TODAY
    )


def test_d1_and_d2_are_complete_once_report_exists():
    assert _effective("D1") == "concluida"
    assert _effective("D2", Form8DDiscipline(status="pendente")) == "concluida"


def test_d4_follows_root_cause_analyses():
    complete = FiveWhysAnalysis(problem_statement="p", root_cause="bico entupido")
    no_root = FiveWhysAnalysis(problem_statement="p", root_cause="  ")
    assert _effective("D4", has_ishikawa=True, five_whys=complete) == "concluida"
    assert _effective("D4", has_ishikawa=True, five_whys=no_root) == "em_andamento"
    assert _effective("D4", five_whys=complete) == "em_andamento"
    assert _effective("D4") == "pendente"


def test_started_discipline_past_completion_date_is_late():
    late = Form8DDiscipline(status="em_andamento", completion_date=date(2024, 6, 1))
    on_time = Form8DDiscipline(status="em_andamento", completion_date=date(2024, 6, 30))
    done = Form8DDiscipline(status="concluida", completion_date=date(2024, 6, 1))
    assert _effective("D5", late) == "atrasada"
    assert _effective("D5", on_time) == "em_andamento"
    assert _effective("D5", done) == "concluida"
    assert _effective("D6") == "pendente"


# ─── report endpoints ────────────────────────────────────────────

FORM = {
    "title": "Escorrimento de verniz",
    "problem_description": "Escorrimento no para-choque",
    "team_members": ["Ana", "Bruno"],
    "problem_date": "2024-06-01",
    "severity_level": "alta",
}


@pytest.fixture
async def form(client, operator_headers):
    resp = await client.post("/api/forms-8d", json=FORM, headers=operator_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_create_form_defaults(form, operator_user):
    assert form["status"] == "aberto"
    assert form["created_by"] == str(operator_user.id)
    assert form["created_by_name"] == "Operador"
    assert form["team_members"] == ["Ana", "Bruno"]


async def test_create_form_validation(client, operator_headers):
    missing = await client.post("/api/forms-8d", json={"title": "x"}, headers=operator_headers)
    assert missing.status_code == 400
    bad_severity = await client.post(
        "/api/forms-8d", json={**FORM, "severity_level": "enorme"}, headers=operator_headers
    )
    assert bad_severity.status_code == 400


async def test_list_and_filter_forms(client, operator_headers, form):
    await client.post("/api/forms-8d", json={**FORM, "severity_level": "baixa"}, headers=operator_headers)
    everything = await client.get("/api/forms-8d", headers=operator_headers)
    assert len(everything.json()) == 2
    high = await client.get("/api/forms-8d", params={"severity": "alta"}, headers=operator_headers)
    assert [f["id"] for f in high.json()] == [form["id"]]


async def test_update_form(client, operator_headers, form):
    resp = await client.put(
        f"/api/forms-8d/{form['id']}", json={"status": "em_andamento"}, headers=operator_headers
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "em_andamento"
    assert resp.json()["title"] == FORM["title"]

    bad = await client.put(f"/api/forms-8d/{form['id']}", json={"status": "feito"}, headers=operator_headers)
    assert bad.status_code == 400


async def test_unknown_assignee_on_form(client, operator_headers, form, manager_user):
    ghost = "00000000-0000-4000-8000-000000000001"
    created = await client.post("/api/forms-8d", json={**FORM, "assigned_to": ghost}, headers=operator_headers)
    assert created.status_code == 400

    updated = await client.put(
        f"/api/forms-8d/{form['id']}", json={"assigned_to": ghost}, headers=operator_headers
    )
    assert updated.status_code == 400

    assigned = await client.put(
        f"/api/forms-8d/{form['id']}", json={"assigned_to": str(manager_user.id)}, headers=operator_headers
    )
    assert assigned.status_code == 200
    assert assigned.json()["assigned_to_name"] == "Gerente"


async def test_disciplines_listing_and_update(client, operator_headers, form):
    url = f"/api/forms-8d/{form['id']}/disciplines"
    listing = await client.get(url, headers=operator_headers)
    rows = listing.json()
    assert [d["discipline_id"] for d in rows] == ["D1", "D2", "D3", "D4", "D5", "D6", "D7", "D8"]
    assert rows[0]["effective_status"] == "concluida"
    assert rows[2]["status"] == "pendente"

    resp = await client.put(
        f"{url}/D3", json={"status": "concluida", "content": "Contenção feita"}, headers=operator_headers
    )
    assert resp.status_code == 200
    d3 = (await client.get(url, headers=operator_headers)).json()[2]
    assert d3["status"] == "concluida"
    assert d3["content"] == "Contenção feita"

    assert (await client.put(f"{url}/D9", json={}, headers=operator_headers)).status_code == 400
    assert (await client.put(f"{url}/D3", json={"status": "x"}, headers=operator_headers)).status_code == 400


async def test_root_cause_analyses_complete_d4(client, operator_headers, form):
    form_url = f"/api/forms-8d/{form['id']}"
    cause = await client.post(
        f"{form_url}/ishikawa",
        json={"category": "maquina", "cause_description": "Bico entupido", "impact_level": 4},
        headers=operator_headers,
    )
    assert cause.status_code == 201

    no_statement = await client.post(f"{form_url}/five-whys", json={"why_1": "?"}, headers=operator_headers)
    assert no_statement.status_code == 400

    whys = await client.post(
        f"{form_url}/five-whys",
        json={"problem_statement": "Escorrimento", "why_1": "Excesso de tinta"},
        headers=operator_headers,
    )
    assert whys.status_code == 200
    d4 = (await client.get(f"{form_url}/disciplines", headers=operator_headers)).json()[3]
    assert d4["effective_status"] == "em_andamento"

    updated = await client.put(f"{form_url}/five-whys", json={"root_cause": "Bico gasto"}, headers=operator_headers)
    assert updated.json()["id"] == whys.json()["id"]
    assert updated.json()["problem_statement"] == "Escorrimento"
    d4 = (await client.get(f"{form_url}/disciplines", headers=operator_headers)).json()[3]
    assert d4["effective_status"] == "concluida"


async def test_ishikawa_validation_update_delete(client, operator_headers, form):
    form_url = f"/api/forms-8d/{form['id']}"
    bad = await client.post(
        f"{form_url}/ishikawa", json={"category": "sorte", "cause_description": "x"}, headers=operator_headers
    )
    assert bad.status_code == 400

    cause = await client.post(
        f"{form_url}/ishikawa", json={"category": "metodo", "cause_description": "x"}, headers=operator_headers
    )
    cause_id = cause.json()["id"]
    updated = await client.put(f"/api/ishikawa/{cause_id}", json={"impact_level": 5}, headers=operator_headers)
    assert updated.json()["impact_level"] == 5
    assert (await client.delete(f"/api/ishikawa/{cause_id}", headers=operator_headers)).status_code == 200
    assert (await client.delete(f"/api/ishikawa/{cause_id}", headers=operator_headers)).status_code == 404


async def test_action_plans(client, operator_headers, form):
    form_url = f"/api/forms-8d/{form['id']}"
    plan = await client.post(
        f"{form_url}/action-plans",
        json={
            "action_type": "corretiva",
            "action_description": "Trocar bico",
            "responsible_person": "Bruno",
            "due_date": "2024-06-15",
        },
        headers=operator_headers,
    )
    assert plan.status_code == 201
    assert plan.json()["status"] == "pendente"

    incomplete = await client.post(
        f"{form_url}/action-plans", json={"action_type": "corretiva"}, headers=operator_headers
    )
    assert incomplete.status_code == 400

    plan_id = plan.json()["id"]
    done = await client.put(f"/api/action-plans/{plan_id}", json={"status": "concluida"}, headers=operator_headers)
    assert done.json()["status"] == "concluida"

    detail = (await client.get(form_url, headers=operator_headers)).json()
    assert [p["id"] for p in detail["action_plans"]] == [plan_id]
    assert detail["five_whys_analysis"] is None

    assert (await client.delete(f"/api/action-plans/{plan_id}", headers=operator_headers)).status_code == 200


async def test_delete_form_requires_manager(client, operator_headers, manager_headers, form):
    form_url = f"/api/forms-8d/{form['id']}"
    await client.post(
        f"{form_url}/ishikawa", json={"category": "material", "cause_description": "x"}, headers=operator_headers
    )
    assert (await client.delete(form_url, headers=operator_headers)).status_code == 403
    assert (await client.delete(form_url, headers=manager_headers)).status_code == 200
    assert (await client.get(form_url, headers=manager_headers)).status_code == 404


async def test_missing_form(client, operator_headers):
    assert (await client.get("/api/forms-8d/999", headers=operator_headers)).status_code == 404
    assert (await client.get("/api/forms-8d/999/disciplines", headers=operator_headers)).status_code == 404
