"""
Resend Verification Email Use Case

Handles resending email verification tokens to the signed-in user.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import USER_NOT_FOUND
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import (
    MailDispatcher,
    MailMessage,
    email_verification_content,
)
from src.app.services.one_time_tokens import EMAIL_VERIFICATION, OneTimeTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ResendVerificationResponse
from .links import verification_url

logger = logging.getLogger(__name__)


class ResendVerificationUseCase:
    """
    Use case for resending email verification.

    Business Rules:
    - User must still exist
    - Already verified email is a conflict, not a silent success
    - New token replaces old token (invalidates previous)
    - Token expiry reset to the configured window
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, dispatcher: MailDispatcher
    ):
        self.uow = uow
        self.settings = settings
        self.dispatcher = dispatcher

    async def execute(
        self, user_id: UUID, link_base: str
    ) -> Result[ResendVerificationResponse]:
        """
        Execute resend verification email use case.

        Args:
            user_id: Authenticated user's ID
            link_base: Public root URL the verification link is built on

        Errors:
            - USER_NOT_FOUND: User no longer exists
            - EMAIL_ALREADY_VERIFIED: Nothing to verify
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(USER_NOT_FOUND, "User does not exist"))

            tokens = OneTimeTokenManager(self.uow.users, self.settings, EMAIL_VERIFICATION)
            minted = await tokens.mint(user)
            if minted.is_err():
                return Return.err(minted.error)

            await self.uow.commit()

        self.dispatcher.dispatch(
            MailMessage(
                recipient=user.email,
                subject="Please verify your email",
                content=email_verification_content(
                    user.username, verification_url(link_base, minted.value)
                ),
            )
        )

        return Return.ok(
            ResendVerificationResponse(
                status="sent", message="Mail has been sent to your email ID"
            )
        )
