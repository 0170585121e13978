"""
Register Use Case

Creates an account and sends the first email verification link.
"""

import logging

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.errors import USER_ALREADY_EXISTS, VALIDATION_ERROR
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import (
    MailDispatcher,
    MailMessage,
    email_verification_content,
)
from src.app.services.one_time_tokens import EMAIL_VERIFICATION, OneTimeTokenManager
from src.app.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    hash_password,
    password_too_long,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole
from .dtos import RegisterCommand, RegisterResponse, UserSummary
from .links import verification_url

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Reject if email or username is already taken
    2. Hash password with bcrypt cost factor 12
    3. Create User with role=member and email_verified=False (role is never client-chosen)
    4. Mint an email verification token (digest + expiry on the user)
    5. Commit, then hand the verification mail to the dispatcher
    6. Return the public user summary
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, dispatcher: MailDispatcher
    ):
        self.uow = uow
        self.settings = settings
        self.dispatcher = dispatcher

    async def execute(
        self, command: RegisterCommand, link_base: str
    ) -> Result[RegisterResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, username, password
            link_base: Public root URL the verification link is built on

        Returns:
            Result[RegisterResponse], or Error(USER_ALREADY_EXISTS) /
            Error(VALIDATION_ERROR)
        """
        if not command.email or not command.username or not command.password:
            return Return.err(
                Error(VALIDATION_ERROR, "Email, username and password are required")
            )
        if password_too_long(command.password):
            return Return.err(
                Error(
                    VALIDATION_ERROR,
                    f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes",
                )
            )

        async with self.uow:
            existing_user = await self.uow.users.get_by_email_or_username(
                command.email, command.username
            )
            if existing_user:
                return Return.err(
                    Error(
                        USER_ALREADY_EXISTS,
                        "User with email or username already exists",
                    )
                )

            user = User(
                email=command.email,
                username=command.username,
                password_hash=hash_password(command.password),
                role=UserRole.member,
                email_verified=False,
            )
            try:
                user = await self.uow.users.create(user)
            except IntegrityError:
                # Lost a race with a concurrent registration
                return Return.err(
                    Error(
                        USER_ALREADY_EXISTS,
                        "User with email or username already exists",
                    )
                )

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
        logger.info(f"Registered user {user.id}")

        return Return.ok(
            RegisterResponse(
                user=UserSummary.from_user(user),
                message="User registered successfully and verification email has been sent",
            )
        )
