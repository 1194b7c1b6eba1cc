import pytest
import pytest_asyncio

from account_security.app.services import totp
from tests.fixtures.api import PASSWORD, bearer


@pytest_asyncio.fixture
async def signed_in(register_user, login):
    await register_user()
    return await login()


@pytest_asyncio.fixture
async def two_factor_user(client, signed_in, clock):
    """Signed-in user with confirmed two-factor; returns (token, setup)"""
    setup = (await client.post("/two-factor/enable", headers=bearer(signed_in))).json()
    code = totp.generate_code(setup["secret"], clock.now())
    response = await client.post(
        "/two-factor/confirm", json={"code": code}, headers=bearer(signed_in)
    )
    assert response.status_code == 200, response.text
    return signed_in, setup


async def start_challenge(client) -> str:
    response = await client.post(
        "/auth/login", json={"email": "user@acme.com", "password": PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "two_factor_required"
    assert data["access_token"] is None
    return data["challenge_token"]


@pytest.mark.asyncio
async def test_enable_returns_setup_once(client, signed_in):
    response = await client.post("/two-factor/enable", headers=bearer(signed_in))

    assert response.status_code == 200
    data = response.json()
    assert len(data["recovery_codes"]) == 8
    assert data["provisioning_uri"].startswith("otpauth://totp/")

    again = await client.post("/two-factor/enable", headers=bearer(signed_in))
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "TWO_FACTOR_PENDING"


@pytest.mark.asyncio
async def test_status_moves_from_pending_to_enabled(client, signed_in, clock):
    headers = bearer(signed_in)
    assert (await client.get("/two-factor/status", headers=headers)).json()["state"] == "disabled"

    setup = (await client.post("/two-factor/enable", headers=headers)).json()
    pending = (await client.get("/two-factor/status", headers=headers)).json()
    assert pending["state"] == "pending_confirmation"
    assert pending["enabled"] is False

    code = totp.generate_code(setup["secret"], clock.now())
    await client.post("/two-factor/confirm", json={"code": code}, headers=headers)

    enabled = (await client.get("/two-factor/status", headers=headers)).json()
    assert enabled["state"] == "enabled"
    assert enabled["enabled"] is True
    assert enabled["recovery_codes_remaining"] == 8


@pytest.mark.asyncio
async def test_confirm_rejects_previous_step(client, signed_in, clock):
    headers = bearer(signed_in)
    setup = (await client.post("/two-factor/enable", headers=headers)).json()
    stale = totp.generate_code(setup["secret"], clock.now())
    clock.advance(seconds=30)

    response = await client.post("/two-factor/confirm", json={"code": stale}, headers=headers)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TWO_FACTOR_CODE"


@pytest.mark.asyncio
async def test_login_with_totp(client, two_factor_user, clock):
    _, setup = two_factor_user
    challenge = await start_challenge(client)

    # two steps of drift are tolerated at login
    code = totp.generate_code(setup["secret"], clock.now())
    clock.advance(seconds=60)
    response = await client.post(
        "/auth/two-factor/verify", json={"challenge_token": challenge, "code": code}
    )

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["status"] == "authenticated"
    assert data["reprovision_recommended"] is False
    assert (await client.get("/sessions", headers=bearer(data["access_token"]))).status_code == 200


@pytest.mark.asyncio
async def test_login_with_recovery_code_recommends_reprovision(client, two_factor_user):
    _, setup = two_factor_user
    challenge = await start_challenge(client)

    response = await client.post(
        "/auth/two-factor/verify",
        json={"challenge_token": challenge, "code": setup["recovery_codes"][0]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["reprovision_recommended"] is True
    assert data["recovery_codes_remaining"] == 7

    reused = await client.post(
        "/auth/two-factor/verify",
        json={"challenge_token": challenge, "code": setup["recovery_codes"][0]},
    )
    assert reused.status_code == 401
    assert reused.json()["error"]["code"] == "INVALID_TWO_FACTOR_CODE"


@pytest.mark.asyncio
async def test_challenge_token_is_not_a_bearer_token(client, two_factor_user):
    challenge = await start_challenge(client)

    response = await client.get("/sessions", headers=bearer(challenge))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_challenge_is_rejected(client, two_factor_user, clock):
    _, setup = two_factor_user
    challenge = await start_challenge(client)
    clock.advance(minutes=6)

    response = await client.post(
        "/auth/two-factor/verify",
        json={
            "challenge_token": challenge,
            "code": totp.generate_code(setup["secret"], clock.now()),
        },
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CHALLENGE"


@pytest.mark.asyncio
async def test_disable_requires_password(client, two_factor_user, login):
    token, _ = two_factor_user

    wrong = await client.post(
        "/two-factor/disable", json={"password": "Wr0ng!Pass"}, headers=bearer(token)
    )
    assert wrong.status_code == 400
    assert wrong.json()["error"]["code"] == "INVALID_PASSWORD"

    response = await client.post(
        "/two-factor/disable", json={"password": PASSWORD}, headers=bearer(token)
    )
    assert response.status_code == 200

    assert await login()


@pytest.mark.asyncio
async def test_regenerate_recovery_codes(client, two_factor_user):
    token, setup = two_factor_user

    response = await client.post(
        "/two-factor/recovery-codes", json={"password": PASSWORD}, headers=bearer(token)
    )

    assert response.status_code == 200
    codes = response.json()["recovery_codes"]
    assert len(codes) == 8
    assert set(codes).isdisjoint(setup["recovery_codes"])

    challenge = await start_challenge(client)
    old = await client.post(
        "/auth/two-factor/verify",
        json={"challenge_token": challenge, "code": setup["recovery_codes"][1]},
    )
    assert old.status_code == 401


@pytest.mark.asyncio
async def test_two_factor_endpoints_need_enabled_state(client, signed_in):
    response = await client.post(
        "/two-factor/disable", json={"password": PASSWORD}, headers=bearer(signed_in)
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "TWO_FACTOR_NOT_ENABLED"
