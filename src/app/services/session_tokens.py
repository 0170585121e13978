"""
Session Token Manager

Mints access/refresh token pairs, keeps the single active refresh token on
the user record, rotates it and clears it on logout.
"""

import hmac
import logging
from typing import NamedTuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result, Return
from src.api.utils.jwt import (
    generate_access_token,
    generate_refresh_token,
    verify_refresh_token,
)
from src.app.errors import internal_error, invalid_token
from src.app.repositories.user_repository import IUserRepository
from src.app.services.auth_settings import AuthSettings

logger = logging.getLogger(__name__)


class TokenPair(NamedTuple):
    access_token: str
    refresh_token: str


class SessionTokenManager:
    """
    Business Rules:
    - One active refresh token per user: issuing a pair overwrites it
    - Rotation requires a valid signature, an unexpired token, an existing
      user, and that the presented token is the one currently stored
    - Concurrent rotations are last-write-wins
    - Access tokens are never persisted
    """

    def __init__(self, users: IUserRepository, settings: AuthSettings):
        self.users = users
        self.settings = settings

    async def issue_pair(self, user_id: UUID) -> Result[TokenPair]:
        """
        Mint a new token pair and persist the refresh token.

        Returns:
            Result with TokenPair, or INTERNAL_ERROR if the user cannot be
            loaded or the refresh token cannot be stored
        """
        try:
            user = await self.users.get_by_id(user_id)
            if user is None:
                logger.error(f"Token issue requested for missing user {user_id}")
                return Return.err(
                    internal_error("Something went wrong while generating tokens")
                )

            access_token = generate_access_token(
                self.settings, user.id, user.role.value, user.email, user.username
            )
            refresh_token = generate_refresh_token(self.settings, user.id)

            await self.users.update_fields(user, {"refresh_token": refresh_token})
        except SQLAlchemyError:
            logger.exception(f"Failed to persist refresh token for user {user_id}")
            return Return.err(
                internal_error("Something went wrong while generating tokens")
            )

        return Return.ok(TokenPair(access_token, refresh_token))

    async def rotate(self, presented_refresh_token: str) -> Result[TokenPair]:
        """
        Exchange a refresh token for a new pair.

        Errors:
            - INVALID_TOKEN: malformed, tampered, expired, unknown user, or not
              the currently stored refresh token
            - INTERNAL_ERROR: persisting the new refresh token failed
        """
        claims = verify_refresh_token(self.settings, presented_refresh_token)
        if claims is None:
            return Return.err(invalid_token())

        try:
            user_id = UUID(claims["user_id"])
        except (TypeError, ValueError):
            return Return.err(invalid_token())

        user = await self.users.get_by_id(user_id)
        if user is None:
            return Return.err(invalid_token())

        if not user.refresh_token or not hmac.compare_digest(
            user.refresh_token.encode("utf-8"),
            presented_refresh_token.encode("utf-8"),
        ):
            logger.warning(f"Stale refresh token presented for user {user.id}")
            return Return.err(invalid_token())

        return await self.issue_pair(user.id)

    async def invalidate(self, user_id: UUID) -> Result[None]:
        """Clear the stored refresh token. Idempotent."""
        user = await self.users.get_by_id(user_id)
        if user is None or user.refresh_token is None:
            return Return.ok(None)

        await self.users.update_fields(user, {"refresh_token": None})
        return Return.ok(None)
