from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.app.repositories.ephemeral_token_repository import (
    IEphemeralTokenRepository,
)
from account_security.domain.entities import EphemeralToken, TokenPurpose


class EphemeralTokenRepository(IEphemeralTokenRepository):
    """EphemeralToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, subject_key: str, purpose: TokenPurpose) -> Optional[EphemeralToken]:
        stmt = (
            select(EphemeralToken)
            .where(
                EphemeralToken.subject_key == subject_key,
                EphemeralToken.purpose == purpose,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, token: EphemeralToken) -> EphemeralToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def delete_for_subject(self, subject_key: str, purpose: TokenPurpose) -> int:
        stmt = delete(EphemeralToken).where(
            EphemeralToken.subject_key == subject_key,
            EphemeralToken.purpose == purpose,
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_id(self, token_id: UUID) -> bool:
        # Only the caller whose DELETE removes the row sees True
        stmt = delete(EphemeralToken).where(EphemeralToken.id == token_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
