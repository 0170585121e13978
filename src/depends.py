from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.cookies import read_access_token
from src.api.utils.jwt import verify_access_token
from src.app.errors import UNAUTHORIZED
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import MailDispatcher

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_settings(request: Request) -> AuthSettings:
    return request.app.state.auth_settings


def get_mail_dispatcher(request: Request) -> MailDispatcher:
    return request.app.state.mail_dispatcher


def get_link_base(
    request: Request, settings: AuthSettings = Depends(get_auth_settings)
) -> str:
    """Public root URL that mailed action links are built on"""
    root = settings.public_base_url or str(request.base_url)
    return root.rstrip("/") + settings.api_prefix


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: AuthSettings = Depends(get_auth_settings),
) -> dict:
    """
    Dependency to extract and verify the access token.

    Reads the Authorization bearer header first, then the access token
    cookie.

    Returns:
        Decoded JWT payload containing user_id, role, email, username

    Raises:
        ClientError: 401 if token is missing, invalid or expired
    """
    token = credentials.credentials if credentials else read_access_token(request, settings)
    payload = verify_access_token(settings, token) if token else None

    if payload is None:
        raise ClientError(
            Error(UNAUTHORIZED, "Invalid or expired token"), status_code=401
        )

    return payload


def get_current_user_id(current_user: dict = Depends(get_current_user)) -> UUID:
    try:
        return UUID(current_user["user_id"])
    except (KeyError, ValueError):
        raise ClientError(
            Error(UNAUTHORIZED, "Invalid or expired token"), status_code=401
        )
