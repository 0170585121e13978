"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import logging

from libs.result import Result, Return
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import MailDispatcher, MailMessage, password_reset_content
from src.app.services.one_time_tokens import PASSWORD_RESET, OneTimeTokenManager
from src.app.services.unit_of_work import UnitOfWork
from .dtos import RequestPasswordResetResponse
from .links import password_reset_url

logger = logging.getLogger(__name__)

_SENT_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure token, store only its SHA-256 digest
    - Token expires after the configured window
    - New request replaces any earlier reset token
    - No email enumeration (same response for valid/invalid emails)
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, dispatcher: MailDispatcher
    ):
        self.uow = uow
        self.settings = settings
        self.dispatcher = dispatcher

    async def execute(
        self, email: str, link_base: str
    ) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Note:
            For security (no email enumeration), always returns success
            even if email doesn't exist. However, only generates token
            if email exists.
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                return Return.ok(
                    RequestPasswordResetResponse(status="sent", message=_SENT_MESSAGE)
                )

            tokens = OneTimeTokenManager(self.uow.users, self.settings, PASSWORD_RESET)
            minted = await tokens.mint(user)
            if minted.is_err():
                return Return.err(minted.error)

            await self.uow.commit()

        self.dispatcher.dispatch(
            MailMessage(
                recipient=user.email,
                subject="Password reset request",
                content=password_reset_content(
                    user.username,
                    password_reset_url(self.settings, link_base, minted.value),
                ),
            )
        )

        return Return.ok(
            RequestPasswordResetResponse(status="sent", message=_SENT_MESSAGE)
        )
