from typing import List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.mailer import IMailer, MailMessage
from src.depends import get_unit_of_work


class RecordingMailer(IMailer):
    """Keeps every message instead of talking to an SMTP server"""

    def __init__(self):
        self.outbox: List[MailMessage] = []

    async def send(self, message: MailMessage) -> bool:
        self.outbox.append(message)
        return True

    def last_token(self) -> str:
        return self.outbox[-1].content.action_url.rsplit("/", 1)[-1]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
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
def mailer():
    return RecordingMailer()


@pytest.fixture
def app(db_session, mailer):
    app = create_app(ApplicationConfig, mailer=mailer)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    # Token cookies are Secure, so the client must talk https to send them back
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="https://test") as ac:
        yield ac


@pytest.fixture
def register(client):
    async def _register(
        email="alice@example.com", username="alice", password="SecurePass123!", **extra
    ):
        return await client.post(
            "/auth/register",
            json={"email": email, "username": username, "password": password, **extra},
        )

    return _register


@pytest.fixture
def login(client):
    async def _login(email="alice@example.com", password="SecurePass123!"):
        return await client.post("/auth/login", json={"email": email, "password": password})

    return _login
