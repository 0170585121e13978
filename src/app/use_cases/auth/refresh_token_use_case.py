"""
Refresh Token Use Case

Handles JWT token refresh with refresh token rotation.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import UNAUTHORIZED
from src.app.services.auth_settings import AuthSettings
from src.app.services.session_tokens import SessionTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing JWT access tokens.

    Business Rules:
    - Refresh token rotation: a new refresh token replaces the stored one
    - Token must carry a valid signature and must not be expired
    - Token must belong to an existing user
    - Token must be the one currently stored for that user
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with RefreshTokenResponse containing new tokens, or Error
        """
        if not refresh_token:
            return Return.err(Error(UNAUTHORIZED, "Unauthorized request"))

        async with self.uow:
            sessions = SessionTokenManager(self.uow.users, self.settings)
            pair = await sessions.rotate(refresh_token)
            if pair.is_err():
                return Return.err(pair.error)

            await self.uow.commit()

        logger.info("Refresh token rotated")

        return Return.ok(
            RefreshTokenResponse(
                access_token=pair.value.access_token,
                refresh_token=pair.value.refresh_token,
            )
        )
