"""
Login Use Case

Handles credential verification and issues a session token pair.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import VALIDATION_ERROR, invalid_credentials
from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import burn_password_check, verify_password
from src.app.services.session_tokens import SessionTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LoginResponse, UserSummary

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password fail identically
    - Unverified accounts may log in
    - Issuing a pair replaces the stored refresh token (one session per user)
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing tokens and user summary, or Error
        """
        if not email:
            return Return.err(Error(VALIDATION_ERROR, "Email is required"))
        if not password:
            return Return.err(Error(VALIDATION_ERROR, "Password is required"))

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            # Always perform a hash check even if user not found
            if user is None:
                burn_password_check(password)
                return Return.err(invalid_credentials())

            if not verify_password(password, user.password_hash):
                logger.info(f"Failed login for user {user.id}")
                return Return.err(invalid_credentials())

            sessions = SessionTokenManager(self.uow.users, self.settings)
            pair = await sessions.issue_pair(user.id)
            if pair.is_err():
                return Return.err(pair.error)

            await self.uow.commit()

        logger.info(f"User {user.id} logged in")

        return Return.ok(
            LoginResponse(
                user=UserSummary.from_user(user),
                access_token=pair.value.access_token,
                refresh_token=pair.value.refresh_token,
            )
        )
