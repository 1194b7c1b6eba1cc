import pytest

from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.request_context import RequestContext
from tests.integration.services.helpers import create_user

IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


async def issue(uow, clock, user, **kwargs):
    async with uow:
        issued = await SessionRegistry(uow, clock).issue(user, **kwargs)
        await uow.commit()
    return issued


@pytest.mark.asyncio
async def test_issue_stores_only_digest_and_detects_device(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)

    issued = await issue(
        uow, clock, user, context=RequestContext(ip_address="10.0.0.1", user_agent=IPHONE)
    )

    assert issued.session.token_hash != issued.token
    assert issued.session.device_name == "iPhone - Safari"
    assert issued.session.device_type == "mobile"
    async with uow:
        resolved = await SessionRegistry(uow, clock).resolve(issued.token)
        await uow.commit()
    assert resolved.id == issued.session.id


@pytest.mark.asyncio
async def test_sessions_expire_after_lifetime(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    issued = await issue(uow, clock, user)

    clock.advance(days=30)
    async with uow:
        assert await SessionRegistry(uow, clock).resolve(issued.token) is None


@pytest.mark.asyncio
async def test_non_expiring_sessions(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    async with uow:
        issued = await SessionRegistry(uow, clock, lifetime_days=None).issue(user)
        await uow.commit()

    assert issued.session.expires_at is None
    clock.advance(days=365)
    async with uow:
        assert await SessionRegistry(uow, clock).resolve(issued.token) is not None


@pytest.mark.asyncio
async def test_revoke_others_keeps_current(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    current = await issue(uow, clock, user, device_name="Laptop")
    await issue(uow, clock, user, device_name="Phone")
    await issue(uow, clock, user, device_name="Tablet")

    async with uow:
        registry = SessionRegistry(uow, clock)
        revoked = await registry.revoke_others(user, current.session.token_hash)
        await uow.commit()

    assert revoked == 2
    async with uow:
        active = await SessionRegistry(uow, clock).list_active(user)
        await uow.commit()
    assert [s.device_name for s in active] == ["Laptop"]


@pytest.mark.asyncio
async def test_revoked_session_cannot_be_revoked_twice(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    issued = await issue(uow, clock, user)

    async with uow:
        registry = SessionRegistry(uow, clock)
        assert await registry.revoke(issued.session) is True
        assert await registry.revoke(issued.session) is False
        assert await registry.resolve(issued.token) is None
        await uow.commit()


@pytest.mark.asyncio
async def test_statistics_count_active_by_device(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    await issue(uow, clock, user, context=RequestContext(user_agent=IPHONE))
    await issue(uow, clock, user, device_name="CI runner", device_type="desktop")
    stale = await issue(uow, clock, user, device_name="Old laptop", device_type="web")

    async with uow:
        registry = SessionRegistry(uow, clock)
        await registry.revoke(stale.session)
        stats = await registry.statistics(user)
        await uow.commit()

    assert stats.total == 3
    assert stats.active == 2
    assert stats.by_device_type == {"mobile": 1, "desktop": 1}
