from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.adapter.repositories.account_lockout_repository import (
    AccountLockoutRepository,
)
from account_security.adapter.repositories.ephemeral_token_repository import (
    EphemeralTokenRepository,
)
from account_security.adapter.repositories.oauth_connection_repository import (
    OAuthConnectionRepository,
)
from account_security.adapter.repositories.password_history_repository import (
    PasswordHistoryRepository,
)
from account_security.adapter.repositories.security_event_repository import (
    SecurityEventRepository,
)
from account_security.adapter.repositories.tenant_repository import TenantRepository
from account_security.adapter.repositories.user_repository import UserRepository
from account_security.adapter.repositories.user_session_repository import (
    UserSessionRepository,
)
from account_security.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.tenants = TenantRepository(self.session)
        self.lockouts = AccountLockoutRepository(self.session)
        self.password_history = PasswordHistoryRepository(self.session)
        self.security_events = SecurityEventRepository(self.session)
        self.sessions = UserSessionRepository(self.session)
        self.oauth_connections = OAuthConnectionRepository(self.session)
        self.ephemeral_tokens = EphemeralTokenRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
