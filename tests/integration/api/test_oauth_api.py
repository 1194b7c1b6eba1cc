import pytest

from tests.fixtures.api import PASSWORD, bearer


async def oauth_sign_in(client, provider: str, code: str) -> dict:
    redirect = await client.get(f"/oauth/{provider}/redirect")
    assert redirect.status_code == 200
    state = redirect.json()["state"]

    response = await client.post(
        f"/oauth/{provider}/callback", json={"code": code, "state": state}
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_redirect_carries_state(client):
    response = await client.get("/oauth/google/redirect")

    assert response.status_code == 200
    data = response.json()
    assert data["provider"] == "google"
    assert data["redirect_url"].endswith(f"state={data['state']}")


@pytest.mark.asyncio
async def test_unsupported_provider(client):
    response = await client.get("/oauth/myspace/redirect")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "PROVIDER_UNSUPPORTED"


@pytest.mark.asyncio
async def test_sign_in_creates_identity_without_password(client, oauth_providers):
    oauth_providers["google"].register("code-1", "g-123", "new@gmail.com", name="New Person")

    data = await oauth_sign_in(client, "google", "code-1")

    assert data["resolution"] == "created"
    assert data["user"]["email"] == "new@gmail.com"
    assert data["user"]["email_verified"] is True

    connections = await client.get("/oauth/connections", headers=bearer(data["access_token"]))
    assert connections.status_code == 200
    body = connections.json()
    assert body["has_password"] is False
    assert [c["provider"] for c in body["connections"]] == ["google"]
    assert body["connections"][0]["name"] == "New Person"


@pytest.mark.asyncio
async def test_second_sign_in_uses_existing_link(client, oauth_providers):
    oauth_providers["google"].register("code-1", "g-123", "new@gmail.com")
    oauth_providers["google"].register("code-2", "g-123", "new@gmail.com")

    first = await oauth_sign_in(client, "google", "code-1")
    second = await oauth_sign_in(client, "google", "code-2")

    assert second["resolution"] == "existing_link"
    assert second["user"]["id"] == first["user"]["id"]


@pytest.mark.asyncio
async def test_sign_in_merges_by_email(client, register_user, oauth_providers):
    user_id = await register_user()
    oauth_providers["github"].register("code-1", "gh-7", "user@acme.com")

    data = await oauth_sign_in(client, "github", "code-1")

    assert data["resolution"] == "merged_by_email"
    assert data["user"]["id"] == user_id


@pytest.mark.asyncio
async def test_state_must_match_provider(client, oauth_providers):
    oauth_providers["github"].register("code-1", "gh-7", "user@acme.com")
    google_state = (await client.get("/oauth/google/redirect")).json()["state"]

    response = await client.post(
        "/oauth/github/callback", json={"code": "code-1", "state": google_state}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "OAUTH_STATE_INVALID"
    assert oauth_providers["github"].exchanged == []


@pytest.mark.asyncio
async def test_provider_rejection(client):
    state = (await client.get("/oauth/google/redirect")).json()["state"]

    response = await client.post(
        "/oauth/google/callback", json={"code": "unknown-code", "state": state}
    )

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "PROVIDER_AUTH_FAILED"


@pytest.mark.asyncio
async def test_cannot_disconnect_last_login_method(client, oauth_providers):
    oauth_providers["google"].register("code-1", "g-123", "new@gmail.com")
    token = (await oauth_sign_in(client, "google", "code-1"))["access_token"]

    response = await client.delete("/oauth/google", headers=bearer(token))

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "LAST_AUTH_METHOD"


@pytest.mark.asyncio
async def test_connect_then_disconnect(client, oauth_providers):
    oauth_providers["google"].register("code-1", "g-123", "new@gmail.com")
    oauth_providers["github"].register("code-2", "gh-9", "new@users.github.com")
    token = (await oauth_sign_in(client, "google", "code-1"))["access_token"]

    state = (await client.get("/oauth/github/connect", headers=bearer(token))).json()["state"]
    connected = await client.post(
        "/oauth/github/connect",
        json={"code": "code-2", "state": state},
        headers=bearer(token),
    )
    assert connected.status_code == 200
    assert connected.json()["provider"] == "github"

    duplicate = await client.post(
        "/oauth/github/connect",
        json={"code": "code-2", "state": state},
        headers=bearer(token),
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "ALREADY_CONNECTED"

    disconnected = await client.delete("/oauth/google", headers=bearer(token))
    assert disconnected.status_code == 200
    assert disconnected.json() == {"status": "disconnected", "provider": "google"}

    missing = await client.delete("/oauth/google", headers=bearer(token))
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_CONNECTED"


@pytest.mark.asyncio
async def test_login_state_cannot_be_used_to_connect(client, register_user, login, oauth_providers):
    await register_user()
    token = await login()
    oauth_providers["github"].register("code-1", "gh-7", "someone@example.com")
    login_state = (await client.get("/oauth/github/redirect")).json()["state"]

    response = await client.post(
        "/oauth/github/connect",
        json={"code": "code-1", "state": login_state},
        headers=bearer(token),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "OAUTH_STATE_INVALID"


@pytest.mark.asyncio
async def test_unverified_provider_email_does_not_merge(client, register_user, oauth_providers):
    await register_user()
    oauth_providers["google"].register(
        "code-1", "attacker-1", "user@acme.com", email_verified=False
    )
    state = (await client.get("/oauth/google/redirect")).json()["state"]

    response = await client.post(
        "/oauth/google/callback", json={"code": "code-1", "state": state}
    )

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "PROVIDER_AUTH_FAILED"
    assert "access_token" not in response.json()


@pytest.mark.asyncio
async def test_unverified_provider_email_does_not_create_identity(client, oauth_providers):
    oauth_providers["github"].register(
        "code-1", "gh-1", "fresh@example.com", email_verified=False
    )
    state = (await client.get("/oauth/github/redirect")).json()["state"]

    response = await client.post(
        "/oauth/github/callback", json={"code": "code-1", "state": state}
    )
    login = await client.post(
        "/auth/login", json={"email": "fresh@example.com", "password": PASSWORD}
    )

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "PROVIDER_AUTH_FAILED"
    assert login.status_code == 401


@pytest.mark.asyncio
async def test_existing_link_signs_in_without_verified_email(client, oauth_providers):
    oauth_providers["google"].register("code-1", "g-123", "new@gmail.com")
    oauth_providers["google"].register(
        "code-2", "g-123", "new@gmail.com", email_verified=False
    )

    first = await oauth_sign_in(client, "google", "code-1")
    second = await oauth_sign_in(client, "google", "code-2")

    assert second["resolution"] == "existing_link"
    assert second["user"]["id"] == first["user"]["id"]


@pytest.mark.asyncio
async def test_password_reset_lets_oauth_identity_disconnect(client, oauth_providers, mailer):
    oauth_providers["google"].register("code-1", "g-123", "new@gmail.com")
    await oauth_sign_in(client, "google", "code-1")

    requested = await client.post("/password-reset/request", json={"email": "new@gmail.com"})
    assert requested.status_code == 200
    confirmed = await client.post(
        "/password-reset/confirm",
        json={
            "email": "new@gmail.com",
            "token": mailer.last_reset_token("new@gmail.com"),
            "new_password": PASSWORD,
        },
    )
    assert confirmed.status_code == 200

    login = await client.post(
        "/auth/login", json={"email": "new@gmail.com", "password": PASSWORD}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]

    connections = await client.get("/oauth/connections", headers=bearer(token))
    assert connections.json()["has_password"] is True

    response = await client.delete("/oauth/google", headers=bearer(token))

    assert response.status_code == 200
    assert response.json() == {"status": "disconnected", "provider": "google"}
