"""Login, current user, health check and the error envelope."""

from conftest import PASSWORD


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Healthy"
    assert resp.headers["X-Correlation-ID"]


async def test_correlation_id_is_echoed(client):
    resp = await client.get("/api/health", headers={"X-Correlation-ID": "abc-123"})
    assert resp.headers["X-Correlation-ID"] == "abc-123"


async def test_login_returns_user_and_token(client, operator_user):
    resp = await client.post("/api/auth/login", json={"username": "operador", "password": PASSWORD})
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["username"] == "operador"
    assert "senha" not in body["user"]

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["papel"] == "operator"


async def test_login_wrong_password(client, operator_user):
    resp = await client.post("/api/auth/login", json={"username": "operador", "password": "wrong"})
    assert resp.status_code == 401
    body = resp.json()
    assert body["status"] == 401
    assert body["error"]["type"] == "http_error"
    assert body["path"] == "/api/auth/login"
    assert body["method"] == "POST"


async def test_login_unknown_user(client):
    resp = await client.post("/api/auth/login", json={"username": "ninguem", "password": PASSWORD})
    assert resp.status_code == 401


async def test_login_inactive_user(client, inactive_user):
    resp = await client.post("/api/auth/login", json={"username": "inativo", "password": PASSWORD})
    assert resp.status_code == 401


async def test_login_missing_fields_is_bad_request(client):
    resp = await client.post("/api/auth/login", json={"username": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"]["type"] == "validation_error"


async def test_me_requires_token(client):
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401


async def test_me_rejects_garbage_token(client):
    resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


async def test_me_rejects_inactive_user_token(client, inactive_user):
    from conftest import auth_headers

    resp = await client.get("/api/auth/me", headers=auth_headers(inactive_user))
    assert resp.status_code == 401
