"""
Security Audit Log

Append-only recorder of security-relevant account activity.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from account_security.app.services.clock import Clock
from account_security.app.services.request_context import RequestContext
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.domain.entities import SecurityEvent, SecurityEventType


class SecurityAuditLog:
    """
    Records SecurityEvent rows inside the caller's transaction.

    Business Rules:
    - Events are only ever inserted, never updated or deleted
    - user_id/tenant_id may be None for events before identity resolution
    - Metadata must not contain secrets (passwords, tokens, codes)
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def record(
        self,
        event_type: SecurityEventType,
        user_id: Optional[UUID] = None,
        tenant_id: Optional[UUID] = None,
        context: Optional[RequestContext] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SecurityEvent:
        context = context or RequestContext()
        event = SecurityEvent(
            user_id=user_id,
            tenant_id=tenant_id,
            event_type=event_type,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            event_metadata=metadata,
            created_at=self.clock.now(),
        )
        return await self.uow.security_events.create(event)

    async def recent_for_user(self, user_id: UUID, limit: int = 20) -> List[SecurityEvent]:
        """Newest events of one user first"""
        return await self.uow.security_events.get_recent_by_user(user_id, limit)
