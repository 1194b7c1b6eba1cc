from typing import Optional
from uuid import UUID

from account_security.app.services.clock import Clock, SystemClock
from account_security.app.services.oauth_linker import OAuthIdentityLinker
from account_security.app.services.security_audit import SecurityAuditLog
from account_security.app.services.session_registry import SessionRegistry
from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import OAuthConnectionInfo, OAuthConnectionsResponse


class ListConnectionsUseCase:
    def __init__(self, uow: UnitOfWork, clock: Optional[Clock] = None):
        self.uow = uow
        self.clock = clock or SystemClock()

    async def execute(self, user_id: UUID) -> Result[OAuthConnectionsResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            linker = OAuthIdentityLinker(
                self.uow,
                {},
                SessionRegistry(self.uow, self.clock),
                SecurityAuditLog(self.uow, self.clock),
                self.clock,
            )
            connections = await linker.list_connections(user)

            return Return.ok(
                OAuthConnectionsResponse(
                    connections=[OAuthConnectionInfo.from_connection(c) for c in connections],
                    has_password=user.has_password,
                )
            )
