import pytest

from config import ApplicationConfig
from tests.fixtures.api import PASSWORD


def admin_headers() -> dict:
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


async def lock_out(client, email="user@acme.com"):
    for _ in range(ApplicationConfig.LOCKOUT_MAX_ATTEMPTS):
        await client.post("/auth/login", json={"email": email, "password": "Wr0ng!Pass"})


@pytest.mark.asyncio
async def test_unlock_lifts_active_lock(client, register_user, login):
    user_id = await register_user()
    await lock_out(client)
    locked = await client.post(
        "/auth/login", json={"email": "user@acme.com", "password": PASSWORD}
    )
    assert locked.status_code == 423

    response = await client.post(f"/admin/users/{user_id}/unlock", headers=admin_headers())

    assert response.status_code == 200
    assert response.json() == {"status": "unlocked", "was_locked": True}
    assert await login()


@pytest.mark.asyncio
async def test_unlock_is_idempotent(client, register_user):
    user_id = await register_user()

    response = await client.post(f"/admin/users/{user_id}/unlock", headers=admin_headers())

    assert response.status_code == 200
    assert response.json()["was_locked"] is False


@pytest.mark.asyncio
async def test_unlock_unknown_user(client):
    response = await client.post(
        "/admin/users/00000000-0000-0000-0000-000000000000/unlock", headers=admin_headers()
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_unlock_requires_admin_key(client, register_user):
    user_id = await register_user()

    missing = await client.post(f"/admin/users/{user_id}/unlock")
    wrong = await client.post(
        f"/admin/users/{user_id}/unlock", headers={"X-Admin-API-Key": "wrong-key"}
    )

    assert missing.status_code == 401
    assert missing.json()["error"]["code"] == "UNAUTHORIZED"
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_API_KEY"
