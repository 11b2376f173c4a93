# tests/test_auth.py

from __future__ import annotations

from .conftest import PASSWORD, signup


async def test_register_rejects_duplicate_username(client) -> None:
    await signup(client, "alice")

    resp = await client.post("/auth/register", json={"username": "alice", "password": PASSWORD})

    assert resp.status_code == 409
    assert resp.json()["code"] == "CONFLICT"


async def test_login_with_wrong_password(client) -> None:
    await signup(client, "alice")

    resp = await client.post("/auth/login", json={"username": "alice", "password": "wrong-password"})

    assert resp.status_code == 401
    assert resp.json()["code"] == "UNAUTHORIZED"


async def test_session_exposes_user(client) -> None:
    resp = await client.post(
        "/auth/register",
        json={"username": "carol", "password": PASSWORD, "name": "Carol C."},
    )
    user_id = resp.json()["id"]
    tokens = (await client.post("/auth/login", json={"username": "carol", "password": PASSWORD})).json()

    resp = await client.get("/auth/session", headers={"Authorization": f"Bearer {tokens['access_token']}"})

    assert resp.status_code == 200
    assert resp.json() == {"user": {"id": user_id, "name": "Carol C.", "username": "carol"}}


async def test_logout_revokes_token(client, fake_redis, alice_headers) -> None:
    resp = await client.post("/auth/logout", headers=alice_headers)
    assert resp.status_code == 200
    assert any(key.startswith("bl:token:") for key in fake_redis.values)

    resp = await client.get("/todo/getItems", headers=alice_headers)

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token 已注销"


async def test_refresh_issues_new_tokens(client) -> None:
    await signup(client, "alice")
    tokens = (await client.post("/auth/login", json={"username": "alice", "password": PASSWORD})).json()

    resp = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert resp.status_code == 200
    new_access = resp.json()["access_token"]
    resp = await client.get("/todo/getItems", headers={"Authorization": f"Bearer {new_access}"})
    assert resp.status_code == 200


async def test_tokens_are_not_interchangeable(client) -> None:
    await signup(client, "alice")
    tokens = (await client.post("/auth/login", json={"username": "alice", "password": PASSWORD})).json()

    # refresh token cannot call procedures
    resp = await client.get("/todo/getItems", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
    assert resp.status_code == 401

    # access token cannot be used to refresh
    resp = await client.post("/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert resp.status_code == 401


async def test_health_reports_dependencies(client) -> None:
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "database": "ok", "redis": "ok"}


async def test_metrics_endpoint_exposes_todo_counters(client, alice_headers) -> None:
    await client.post("/todo/createToDo", json={"text": "count me"}, headers=alice_headers)

    resp = await client.get("/metrics/")

    assert resp.status_code == 200
    assert "todo_operation_total" in resp.text
