"""
Logout Use Case

Clears the stored refresh token so the session can no longer be refreshed.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.auth_settings import AuthSettings
from src.app.services.session_tokens import SessionTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Business Rules:
    - Idempotent: logging out without an active session still succeeds
    - Already issued access tokens stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(self, user_id: UUID) -> Result[LogoutResponse]:
        async with self.uow:
            sessions = SessionTokenManager(self.uow.users, self.settings)
            cleared = await sessions.invalidate(user_id)
            if cleared.is_err():
                return Return.err(cleared.error)

            await self.uow.commit()

        logger.info(f"User {user_id} logged out")

        return Return.ok(LogoutResponse(status="logged_out", message="User logged out"))
