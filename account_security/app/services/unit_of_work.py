from abc import ABC, abstractmethod

from account_security.app.repositories.account_lockout_repository import (
    IAccountLockoutRepository,
)
from account_security.app.repositories.ephemeral_token_repository import (
    IEphemeralTokenRepository,
)
from account_security.app.repositories.oauth_connection_repository import (
    IOAuthConnectionRepository,
)
from account_security.app.repositories.password_history_repository import (
    IPasswordHistoryRepository,
)
from account_security.app.repositories.security_event_repository import (
    ISecurityEventRepository,
)
from account_security.app.repositories.tenant_repository import ITenantRepository
from account_security.app.repositories.user_repository import IUserRepository
from account_security.app.repositories.user_session_repository import (
    IUserSessionRepository,
)


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    tenants: ITenantRepository
    lockouts: IAccountLockoutRepository
    password_history: IPasswordHistoryRepository
    security_events: ISecurityEventRepository
    sessions: IUserSessionRepository
    oauth_connections: IOAuthConnectionRepository
    ephemeral_tokens: IEphemeralTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
