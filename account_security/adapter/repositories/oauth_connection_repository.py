from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.app.repositories.oauth_connection_repository import (
    IOAuthConnectionRepository,
)
from account_security.domain.entities import OAuthConnection


class OAuthConnectionRepository(IOAuthConnectionRepository):
    """OAuthConnection repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_provider_user_id(
        self, provider: str, provider_user_id: str
    ) -> Optional[OAuthConnection]:
        stmt = select(OAuthConnection).where(
            OAuthConnection.provider == provider,
            OAuthConnection.provider_user_id == provider_user_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_and_provider(
        self, user_id: UUID, provider: str
    ) -> Optional[OAuthConnection]:
        stmt = select(OAuthConnection).where(
            OAuthConnection.user_id == user_id,
            OAuthConnection.provider == provider,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_user_id(self, user_id: UUID) -> List[OAuthConnection]:
        stmt = (
            select(OAuthConnection)
            .where(OAuthConnection.user_id == user_id)
            .order_by(OAuthConnection.connected_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, connection: OAuthConnection) -> OAuthConnection:
        self.session.add(connection)
        await self.session.flush()
        await self.session.refresh(connection)
        return connection

    async def update(self, connection: OAuthConnection) -> OAuthConnection:
        self.session.add(connection)
        await self.session.flush()
        await self.session.refresh(connection)
        return connection

    async def delete(self, connection: OAuthConnection) -> None:
        await self.session.delete(connection)
        await self.session.flush()
