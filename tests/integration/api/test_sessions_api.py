import pytest

from tests.fixtures.api import PASSWORD, bearer

IPHONE = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) Mobile/15E148 Safari/604.1"
DESKTOP = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


@pytest.mark.asyncio
async def test_list_marks_current_session(client, register_user, login):
    await register_user()
    phone = await login(headers={"User-Agent": IPHONE})
    await login(headers={"User-Agent": DESKTOP})

    response = await client.get("/sessions", headers=bearer(phone))

    assert response.status_code == 200
    sessions = response.json()["sessions"]
    assert len(sessions) == 2
    current = [s for s in sessions if s["is_current"]]
    assert len(current) == 1
    assert current[0]["user_agent"] == IPHONE


@pytest.mark.asyncio
async def test_revoke_single_session(client, register_user, login):
    await register_user()
    current = await login()
    other = await login()

    sessions = (await client.get("/sessions", headers=bearer(current))).json()["sessions"]
    other_id = next(s["id"] for s in sessions if not s["is_current"])

    response = await client.delete(f"/sessions/{other_id}", headers=bearer(current))
    assert response.status_code == 200
    assert response.json()["revoked_count"] == 1

    assert (await client.get("/sessions", headers=bearer(other))).status_code == 401

    again = await client.delete(f"/sessions/{other_id}", headers=bearer(current))
    assert again.status_code == 404
    assert again.json()["error"]["code"] == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_cannot_revoke_another_users_session(client, register_user, login):
    await register_user()
    await register_user(email="other@acme.com")
    mine = await login()
    theirs = await login(email="other@acme.com")

    their_sessions = (await client.get("/sessions", headers=bearer(theirs))).json()["sessions"]

    response = await client.delete(
        f"/sessions/{their_sessions[0]['id']}", headers=bearer(mine)
    )

    assert response.status_code == 404
    assert (await client.get("/sessions", headers=bearer(theirs))).status_code == 200


@pytest.mark.asyncio
async def test_revoke_others_keeps_current(client, register_user, login):
    await register_user()
    current = await login()
    second = await login()
    third = await login()

    response = await client.post("/sessions/revoke-others", headers=bearer(current))

    assert response.status_code == 200
    assert response.json()["revoked_count"] == 2
    assert (await client.get("/sessions", headers=bearer(current))).status_code == 200
    assert (await client.get("/sessions", headers=bearer(second))).status_code == 401
    assert (await client.get("/sessions", headers=bearer(third))).status_code == 401


@pytest.mark.asyncio
async def test_revoke_all_requires_password(client, register_user, login):
    await register_user()
    current = await login()
    other = await login()

    wrong = await client.post(
        "/sessions/revoke-all", json={"password": "Wr0ng!Pass"}, headers=bearer(current)
    )
    assert wrong.status_code == 400
    assert wrong.json()["error"]["code"] == "INVALID_PASSWORD"

    response = await client.post(
        "/sessions/revoke-all", json={"password": PASSWORD}, headers=bearer(current)
    )
    assert response.status_code == 200
    assert response.json()["revoked_count"] == 2
    assert (await client.get("/sessions", headers=bearer(current))).status_code == 401
    assert (await client.get("/sessions", headers=bearer(other))).status_code == 401


@pytest.mark.asyncio
async def test_sessions_expire_after_lifetime(client, register_user, login, clock):
    await register_user()
    token = await login()

    clock.advance(days=31)

    assert (await client.get("/sessions", headers=bearer(token))).status_code == 401


@pytest.mark.asyncio
async def test_statistics(client, register_user, login):
    await register_user()
    token = await login(headers={"User-Agent": IPHONE})
    await login(headers={"User-Agent": DESKTOP})
    other = await login(headers={"User-Agent": DESKTOP})
    await client.post("/sessions/revoke-others", headers=bearer(other))

    response = await client.get("/sessions/statistics", headers=bearer(other))

    assert response.status_code == 200
    data = response.json()
    assert data["total_sessions"] == 3
    assert data["active_sessions"] == 1
    assert (await client.get("/sessions", headers=bearer(token))).status_code == 401
