from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Result, Return
from .dtos import SecurityEventInfo, SecurityEventsResponse

RECENT_EVENTS_LIMIT = 20


class GetSecurityEventsUseCase:
    """Recent security events of the signed-in user, newest first"""

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(
        self, user_id: UUID, limit: int = RECENT_EVENTS_LIMIT
    ) -> Result[SecurityEventsResponse]:
        async with self.uow:
            events = await SecurityAuditLog(self.uow, self.clock).recent_for_user(
                user_id, limit
            )

            return Return.ok(
                SecurityEventsResponse(
                    events=[
                        SecurityEventInfo(
                            id=str(event.id),
                            event_type=event.event_type,
                            ip_address=event.ip_address,
                            user_agent=event.user_agent,
                            metadata=event.event_metadata,
                            created_at=event.created_at,
                        )
                        for event in events
                    ]
                )
            )
