"""
One-Time Token Lifecycle

Email verification and password reset share one lifecycle: mint a random
token, store its digest and expiry on the user, deliver the plaintext,
and later consume it exactly once. The two uses differ only in which pair
of user columns they own.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, NamedTuple, Optional

from libs.result import Error, Result, Return
from src.app.errors import EMAIL_ALREADY_VERIFIED, invalid_token
from src.app.repositories.user_repository import IUserRepository
from src.app.services.auth_settings import AuthSettings
from src.app.services.token_generator import digest_of, new_opaque_token
from src.domain.entities import User

logger = logging.getLogger(__name__)


class TokenPurpose(NamedTuple):
    name: str
    digest_field: str
    expiry_field: str
    requires_unverified_email: bool = False


EMAIL_VERIFICATION = TokenPurpose(
    "email_verification",
    "email_verification_token",
    "email_verification_expires_at",
    requires_unverified_email=True,
)
PASSWORD_RESET = TokenPurpose(
    "password_reset", "password_reset_token", "password_reset_expires_at"
)


class OneTimeTokenManager:
    """
    Business Rules:
    - Only the SHA-256 digest and an absolute expiry are stored
    - Minting replaces any earlier token of the same purpose
    - A token is valid while its digest matches and now < expiry
    - Consuming clears digest and expiry in the same guarded write that
      applies the effect, so a token succeeds at most once
    - Failures never say whether the token was unknown or expired
    """

    def __init__(
        self,
        users: IUserRepository,
        settings: AuthSettings,
        purpose: TokenPurpose,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.users = users
        self.settings = settings
        self.purpose = purpose
        self.clock = clock

    async def mint(self, user: User) -> Result[str]:
        """
        Generate a token for ``user`` and persist its digest and expiry.

        Uses a partial update; the caller has already validated the rest
        of the record.

        Returns:
            Result with the plaintext token for delivery by mail, or
            EMAIL_ALREADY_VERIFIED when minting a verification token for a
            verified account
        """
        if self.purpose.requires_unverified_email and user.email_verified:
            return Return.err(Error(EMAIL_ALREADY_VERIFIED, "Email is already verified"))

        token = new_opaque_token(self.settings.temporary_token_expires, self.clock)
        await self.users.update_fields(
            user,
            {
                self.purpose.digest_field: token.digest,
                self.purpose.expiry_field: token.expires_at,
            },
        )
        logger.info(f"Minted {self.purpose.name} token for user {user.id}")
        return Return.ok(token.plaintext)

    async def consume(
        self, plaintext: str, effect: Optional[Dict[str, Any]] = None
    ) -> Result[User]:
        """
        Validate ``plaintext`` and invalidate it, applying ``effect``.

        Args:
            plaintext: Token as delivered to the user
            effect: Extra column values written together with the clearing
                of the token (e.g. email_verified=True)

        Returns:
            Result with the updated User, or INVALID_TOKEN
        """
        digest = digest_of(plaintext)
        user = await self.users.find_by_token_digest(
            self.purpose.digest_field, self.purpose.expiry_field, digest, self.clock()
        )
        if user is None:
            return Return.err(invalid_token())

        values = dict(effect or {})
        values[self.purpose.digest_field] = None
        values[self.purpose.expiry_field] = None

        written = await self.users.update_fields(
            user, values, expected={self.purpose.digest_field: digest}
        )
        if not written:
            # Consumed concurrently by another request
            return Return.err(invalid_token())

        logger.info(f"Consumed {self.purpose.name} token for user {user.id}")
        return Return.ok(user)
