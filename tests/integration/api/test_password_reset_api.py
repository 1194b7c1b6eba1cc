import pytest

from tests.fixtures.api import PASSWORD, bearer

NEW_PASSWORD = "N3w!Passw0rd"


@pytest.mark.asyncio
async def test_request_response_does_not_reveal_accounts(client, register_user, mailer):
    await register_user()

    known = await client.post("/password-reset/request", json={"email": "user@acme.com"})
    unknown = await client.post("/password-reset/request", json={"email": "ghost@acme.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert [email for email, _ in mailer.resets] == ["user@acme.com"]


@pytest.mark.asyncio
async def test_validate_token(client, register_user, mailer):
    await register_user()
    await client.post("/password-reset/request", json={"email": "user@acme.com"})
    token = mailer.last_reset_token("user@acme.com")

    valid = await client.post(
        "/password-reset/validate", json={"email": "user@acme.com", "token": token}
    )
    invalid = await client.post(
        "/password-reset/validate", json={"email": "user@acme.com", "token": "nope"}
    )

    assert valid.json() == {"valid": True}
    assert invalid.json() == {"valid": False}


@pytest.mark.asyncio
async def test_confirm_resets_password_and_signs_out(client, register_user, login, mailer):
    await register_user()
    old_session = await login()
    await client.post("/password-reset/request", json={"email": "user@acme.com"})
    token = mailer.last_reset_token("user@acme.com")

    response = await client.post(
        "/password-reset/confirm",
        json={"email": "user@acme.com", "token": token, "new_password": NEW_PASSWORD},
    )

    assert response.status_code == 200
    assert (await client.get("/sessions", headers=bearer(old_session))).status_code == 401
    assert await login(password=NEW_PASSWORD)

    old = await client.post(
        "/auth/login", json={"email": "user@acme.com", "password": PASSWORD}
    )
    assert old.status_code == 401


@pytest.mark.asyncio
async def test_token_is_single_use(client, register_user, mailer):
    await register_user()
    await client.post("/password-reset/request", json={"email": "user@acme.com"})
    token = mailer.last_reset_token("user@acme.com")
    payload = {"email": "user@acme.com", "token": token, "new_password": NEW_PASSWORD}

    first = await client.post("/password-reset/confirm", json=payload)
    second = await client.post(
        "/password-reset/confirm", json={**payload, "new_password": "An0ther!Pass"}
    )

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_new_request_replaces_outstanding_token(client, register_user, mailer):
    await register_user()
    await client.post("/password-reset/request", json={"email": "user@acme.com"})
    first = mailer.last_reset_token("user@acme.com")
    await client.post("/password-reset/request", json={"email": "user@acme.com"})
    second = mailer.last_reset_token("user@acme.com")

    stale = await client.post(
        "/password-reset/confirm",
        json={"email": "user@acme.com", "token": first, "new_password": NEW_PASSWORD},
    )
    fresh = await client.post(
        "/password-reset/confirm",
        json={"email": "user@acme.com", "token": second, "new_password": NEW_PASSWORD},
    )

    assert stale.status_code == 400
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_expired_token(client, register_user, mailer, clock):
    await register_user()
    await client.post("/password-reset/request", json={"email": "user@acme.com"})
    token = mailer.last_reset_token("user@acme.com")
    clock.advance(hours=1, seconds=1)

    response = await client.post(
        "/password-reset/confirm",
        json={"email": "user@acme.com", "token": token, "new_password": NEW_PASSWORD},
    )

    assert response.status_code == 410
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_confirm_enforces_policy_and_history(client, register_user, mailer):
    await register_user()
    await client.post("/password-reset/request", json={"email": "user@acme.com"})
    token = mailer.last_reset_token("user@acme.com")

    weak = await client.post(
        "/password-reset/confirm",
        json={"email": "user@acme.com", "token": token, "new_password": "short"},
    )
    reused = await client.post(
        "/password-reset/confirm",
        json={"email": "user@acme.com", "token": token, "new_password": PASSWORD},
    )

    assert weak.status_code == 422
    assert weak.json()["error"]["code"] == "PASSWORD_POLICY_VIOLATION"
    assert reused.status_code == 400
    assert reused.json()["error"]["code"] == "PASSWORD_REUSED"
