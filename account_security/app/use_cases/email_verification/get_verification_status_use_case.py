from uuid import UUID

from account_security.app.services.unit_of_work import UnitOfWork
from account_security.libs.result import Error, Result, Return
from .dtos import VerificationStatusResponse


class GetVerificationStatusUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[VerificationStatusResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                VerificationStatusResponse(
                    verified=user.email_verified,
                    email=user.email,
                    verified_at=user.email_verified_at,
                )
            )
