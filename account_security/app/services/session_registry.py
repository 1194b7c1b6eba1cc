"""
Session Registry

Opaque bearer tokens backed by one UserSession row per device.
"""

import hashlib
import logging
import secrets
from collections import Counter
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, List, Optional

from account_security.app.services.clock import Clock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.app.services.user_agent import describe_device
from account_security.domain.entities import User, UserSession
from config import ApplicationConfig

logger = logging.getLogger(__name__)

_UNSET = object()


def hash_session_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


@dataclass(frozen=True)
class IssuedSession:
    token: str
    session: UserSession


@dataclass(frozen=True)
class SessionStatistics:
    total: int
    active: int
    by_device_type: Dict[str, int]


class SessionRegistry:
    """
    Business Rules:
    - The plaintext token is returned once; only its SHA-256 digest is stored
    - Issuing always inserts a new row, it never reuses an existing session
    - A session is active while expires_at is NULL or in the future
    - Revocation sets expires_at to now
    - Issue and revoke take the user row lock first
    """

    def __init__(self, uow: UnitOfWork, clock: Clock, lifetime_days=_UNSET):
        self.uow = uow
        self.clock = clock
        if lifetime_days is _UNSET:
            lifetime_days = ApplicationConfig.SESSION_LIFETIME_DAYS
        self.lifetime_days = lifetime_days

    async def issue(
        self,
        user: User,
        device_name: Optional[str] = None,
        device_type: Optional[str] = None,
        context: Optional[RequestContext] = None,
    ) -> IssuedSession:
        context = context or RequestContext()
        now = self.clock.now()

        if device_name is None or device_type is None:
            detected = describe_device(context.user_agent)
            device_name = device_name or detected.name
            device_type = device_type or detected.device_type.value

        token = secrets.token_urlsafe(40)

        await self.uow.users.lock(user.id)
        session = await self.uow.sessions.create(
            UserSession(
                user_id=user.id,
                tenant_id=user.tenant_id,
                token_hash=hash_session_token(token),
                device_name=device_name,
                device_type=device_type,
                ip_address=context.ip_address,
                user_agent=context.user_agent,
                last_activity_at=now,
                expires_at=(
                    now + timedelta(days=self.lifetime_days)
                    if self.lifetime_days is not None
                    else None
                ),
                created_at=now,
            )
        )
        return IssuedSession(token=token, session=session)

    async def resolve(self, token: str) -> Optional[UserSession]:
        """Active session presenting this bearer token, or None"""
        if not token:
            return None
        session = await self.uow.sessions.get_by_token_hash(hash_session_token(token))
        if session is None or not session.is_active(self.clock.now()):
            return None
        return session

    async def list_active(self, user: User) -> List[UserSession]:
        return await self.uow.sessions.get_active_by_user_id(user.id, self.clock.now())

    async def touch(self, session: UserSession) -> None:
        await self.uow.sessions.touch(session.id, self.clock.now())

    async def revoke(self, session: UserSession) -> bool:
        await self.uow.users.lock(session.user_id)
        return await self.uow.sessions.revoke_by_id(session.id, self.clock.now())

    async def revoke_others(self, user: User, current_token_hash: Optional[str]) -> int:
        await self.uow.users.lock(user.id)
        count = await self.uow.sessions.revoke_all_by_user_id(
            user.id, self.clock.now(), except_token_hash=current_token_hash
        )
        logger.info(f"Revoked {count} other sessions for user {user.id}")
        return count

    async def revoke_all(self, user: User) -> int:
        await self.uow.users.lock(user.id)
        count = await self.uow.sessions.revoke_all_by_user_id(user.id, self.clock.now())
        logger.info(f"Revoked all {count} sessions for user {user.id}")
        return count

    async def statistics(self, user: User) -> SessionStatistics:
        sessions = await self.uow.sessions.get_by_user_id(user.id)
        now = self.clock.now()
        active = [s for s in sessions if s.is_active(now)]
        return SessionStatistics(
            total=len(sessions),
            active=len(active),
            by_device_type=dict(Counter(s.device_type or "unknown" for s in active)),
        )
