from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import Principal, SessionStatisticsResponse


class GetSessionStatisticsUseCase:
    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, principal: Principal) -> Result[SessionStatisticsResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            stats = await SessionRegistry(self.uow, self.clock).statistics(user)

            return Return.ok(
                SessionStatisticsResponse(
                    total_sessions=stats.total,
                    active_sessions=stats.active,
                    by_device_type=stats.by_device_type,
                )
            )
