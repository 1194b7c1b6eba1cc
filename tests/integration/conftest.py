import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from account_security.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from account_security.depends import (
    get_clock,
    get_mailer,
    get_oauth_providers,
    get_unit_of_work,
)
from account_security.domain.entities import Tenant
from tests.fixtures.api import PASSWORD
from tests.fixtures.fakes import FakeClock, FakeOAuthProvider, RecordingMailer


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def oauth_providers():
    return {
        "google": FakeOAuthProvider("google"),
        "github": FakeOAuthProvider("github"),
    }


@pytest_asyncio.fixture
async def tenant(db_session):
    tenant = Tenant(name="Acme Corp")
    db_session.add(tenant)
    await db_session.commit()
    await db_session.refresh(tenant)
    return tenant


@pytest_asyncio.fixture
async def client(db_session, clock, mailer, oauth_providers):
    from account_security.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_oauth_providers] = lambda: oauth_providers

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_user(client, mailer, tenant):
    """Register through the API; verifies the email unless told not to"""
    tenant_id = str(tenant.id)

    async def _register(email="user@acme.com", password=PASSWORD, name="Test User", verify=True):
        response = await client.post(
            "/auth/register",
            json={
                "tenant_id": tenant_id,
                "name": name,
                "email": email,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        user_id = response.json()["user"]["id"]

        if verify:
            verified = await client.post(
                "/email-verification/verify",
                json={"user_id": user_id, "token": mailer.last_verification_token(email)},
            )
            assert verified.status_code == 200, verified.text
        return user_id

    return _register


@pytest.fixture
def login(client):
    """Password login returning the access token"""

    async def _login(email="user@acme.com", password=PASSWORD, headers=None):
        response = await client.post(
            "/auth/login", json={"email": email, "password": password}, headers=headers or {}
        )
        assert response.status_code == 200, response.text
        data = response.json()
        assert data["status"] == "authenticated"
        return data["access_token"]

    return _login
