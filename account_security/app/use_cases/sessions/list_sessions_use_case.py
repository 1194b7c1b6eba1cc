from typing import Optional

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import Principal, SessionInfo, SessionListResponse


class ListSessionsUseCase:
    """Active sessions of the caller, most recent activity first"""

    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, principal: Principal) -> Result[SessionListResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(principal.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            sessions = await SessionRegistry(self.uow, self.clock).list_active(user)

            return Return.ok(
                SessionListResponse(
                    sessions=[SessionInfo.from_session(s, principal.session_id) for s in sessions]
                )
            )
