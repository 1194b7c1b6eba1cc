"""
Integration tests for the lockout state machine against SQLite
"""

import pytest

from account_security.app.services.lockout_guard import LockoutGuard
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.domain.entities import SecurityEventType
from tests.integration.services.helpers import create_user


async def fail(uow, clock, user, times=1):
    for _ in range(times):
        async with uow:
            guard = LockoutGuard(uow, SecurityAuditLog(uow, clock), clock)
            lockout = await guard.record_failure(user)
            await uow.commit()
    return lockout


async def is_locked(uow, clock, user):
    async with uow:
        locked = await LockoutGuard(uow, SecurityAuditLog(uow, clock), clock).check_locked(user)
        await uow.commit()
    return locked


async def event_types(uow, user):
    async with uow:
        events = await uow.security_events.get_recent_by_user(user.id, 50)
        await uow.commit()
    return [e.event_type for e in events]


@pytest.mark.asyncio
async def test_five_failures_lock_for_fifteen_minutes(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)

    lockout = await fail(uow, clock, user, times=4)
    assert lockout.failed_attempts == 4
    assert await is_locked(uow, clock, user) is False

    lockout = await fail(uow, clock, user)
    assert lockout.failed_attempts == 5
    assert await is_locked(uow, clock, user) is True

    types = await event_types(uow, user)
    assert types.count(SecurityEventType.login_failed) == 5
    assert types.count(SecurityEventType.account_locked) == 1

    clock.advance(minutes=14, seconds=59)
    assert await is_locked(uow, clock, user) is True
    clock.advance(seconds=1)
    assert await is_locked(uow, clock, user) is False


@pytest.mark.asyncio
async def test_lock_expiry_restarts_the_count(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    await fail(uow, clock, user, times=5)

    clock.advance(minutes=15)
    lockout = await fail(uow, clock, user)

    assert lockout.failed_attempts == 1
    assert lockout.locked_until is None


@pytest.mark.asyncio
async def test_failures_while_locked_do_not_relock(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    await fail(uow, clock, user, times=5)
    first_until = (await fail(uow, clock, user)).locked_until

    clock.advance(minutes=5)
    lockout = await fail(uow, clock, user)

    assert lockout.locked_until == first_until
    assert (await event_types(uow, user)).count(SecurityEventType.account_locked) == 1


@pytest.mark.asyncio
async def test_success_resets_counter(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    await fail(uow, clock, user, times=3)

    async with uow:
        guard = LockoutGuard(uow, SecurityAuditLog(uow, clock), clock)
        await guard.record_success(user)
        await uow.commit()

    lockout = await fail(uow, clock, user)
    assert lockout.failed_attempts == 1


@pytest.mark.asyncio
async def test_unlock_reports_whether_a_lock_was_lifted(uow, clock, tenant):
    user = await create_user(uow, tenant, clock)
    await fail(uow, clock, user, times=5)

    async with uow:
        guard = LockoutGuard(uow, SecurityAuditLog(uow, clock), clock)
        assert await guard.unlock(user) is True
        assert await guard.unlock(user) is False
        await uow.commit()

    assert await is_locked(uow, clock, user) is False
