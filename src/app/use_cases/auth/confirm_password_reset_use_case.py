"""
Confirm Password Reset Use Case

Handles password reset confirmation with one-time token validation.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import VALIDATION_ERROR
from src.app.services.auth_settings import AuthSettings
from src.app.services.one_time_tokens import PASSWORD_RESET, OneTimeTokenManager
from src.app.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    hash_password,
    password_too_long,
)
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ConfirmPasswordResetResponse

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored digest
    - Token must not be expired; unknown and expired fail identically
    - Password is hashed with bcrypt (cost factor 12)
    - Stored refresh token is cleared, so every session must log in again
    - Token is cleared after successful reset (single-use)
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(
        self, token: str, new_password: str
    ) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Errors:
            - VALIDATION_ERROR: Token or password missing
            - INVALID_TOKEN: Token unknown, already used or expired
        """
        if not token:
            return Return.err(Error(VALIDATION_ERROR, "Password reset token is missing"))
        if not new_password:
            return Return.err(Error(VALIDATION_ERROR, "New password is required"))
        if password_too_long(new_password):
            return Return.err(
                Error(
                    VALIDATION_ERROR,
                    f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes",
                )
            )

        password_hash = hash_password(new_password)

        async with self.uow:
            tokens = OneTimeTokenManager(self.uow.users, self.settings, PASSWORD_RESET)
            consumed = await tokens.consume(
                token, effect={"password_hash": password_hash, "refresh_token": None}
            )
            if consumed.is_err():
                return Return.err(consumed.error)

            await self.uow.commit()

        logger.info(f"Password reset for user {consumed.value.id}")

        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success", message="Password reset successfully"
            )
        )
