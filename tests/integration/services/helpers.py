from account_security.app.services.password_hasher import hash_password
from account_security.domain.entities import User
from tests.fixtures.api import PASSWORD


async def create_user(uow, tenant, clock, email="user@acme.com", password=PASSWORD, **fields):
    async with uow:
        user = await uow.users.create(
            User(
                tenant_id=tenant.id,
                name="Test User",
                email=email,
                password_hash=hash_password(password),
                email_verified_at=clock.now(),
                created_at=clock.now(),
                updated_at=clock.now(),
                **fields,
            )
        )
        await uow.commit()
    return user
