"""
Change Password Use Case

Lets a signed-in user replace their password.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.errors import USER_NOT_FOUND, VALIDATION_ERROR, invalid_credentials
from src.app.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    hash_password,
    password_too_long,
    verify_password,
)
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ChangePasswordResponse

logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, old_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        if not old_password or not new_password:
            return Return.err(
                Error(VALIDATION_ERROR, "Old and new password are required")
            )
        if password_too_long(new_password):
            return Return.err(
                Error(
                    VALIDATION_ERROR,
                    f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes",
                )
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(USER_NOT_FOUND, "User does not exist"))

            if not verify_password(old_password, user.password_hash):
                return Return.err(invalid_credentials())

            await self.uow.users.update_fields(
                user, {"password_hash": hash_password(new_password)}
            )
            await self.uow.commit()

        logger.info(f"Password changed for user {user_id}")

        return Return.ok(
            ChangePasswordResponse(status="success", message="Password changed successfully")
        )
