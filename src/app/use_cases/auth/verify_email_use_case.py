"""
Verify Email Use Case

Handles email verification via one-time token.
"""

import logging

from libs.result import Error, Result, Return
from src.app.errors import VALIDATION_ERROR
from src.app.services.auth_settings import AuthSettings
from src.app.services.one_time_tokens import EMAIL_VERIFICATION, OneTimeTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import VerifyEmailResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token digest must match the user's email_verification_token
    - Token must not be expired
    - Sets email_verified = True
    - Clears verification token and expiry (single-use)
    - Unknown and expired tokens fail with the same error
    """

    def __init__(self, uow: UnitOfWork, settings: AuthSettings):
        self.uow = uow
        self.settings = settings

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification status, or Error

        Errors:
            - VALIDATION_ERROR: Token missing
            - INVALID_TOKEN: Token unknown, already used or expired
        """
        if not token:
            return Return.err(
                Error(VALIDATION_ERROR, "Email verification token is missing")
            )

        async with self.uow:
            tokens = OneTimeTokenManager(self.uow.users, self.settings, EMAIL_VERIFICATION)
            consumed = await tokens.consume(token, effect={"email_verified": True})
            if consumed.is_err():
                return Return.err(consumed.error)

            await self.uow.commit()

        logger.info(f"Email verified for user {consumed.value.id}")

        return Return.ok(
            VerifyEmailResponse(status="verified", message="Email is verified")
        )
