from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import or_, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User

# Columns a partial update may touch
PARTIAL_UPDATE_FIELDS = frozenset(
    {
        "password_hash",
        "email_verified",
        "email_verification_token",
        "email_verification_expires_at",
        "password_reset_token",
        "password_reset_expires_at",
        "refresh_token",
    }
)


def _validate(user: User) -> None:
    """Whole-record checks applied by create()"""
    if not user.email or "@" not in user.email:
        raise ValueError("User email is invalid")
    if not user.username:
        raise ValueError("User username is required")
    if not user.password_hash:
        raise ValueError("User password hash is required")


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email_or_username(
        self, email: str, username: str
    ) -> Optional[User]:
        """Get a user holding either the email or the username"""
        stmt = select(User).where(or_(User.email == email, User.username == username))
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        _validate(user)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_fields(
        self,
        user: User,
        values: Dict[str, Any],
        expected: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Write only the given columns of one user row.

        Runs a single UPDATE ... WHERE id = :id [AND guard columns], so the
        guard check and the write are atomic. On success the in-memory
        user is brought in line without being marked dirty.
        """
        unknown = set(values) - PARTIAL_UPDATE_FIELDS
        if unknown:
            raise ValueError(f"Columns not allowed in partial update: {sorted(unknown)}")

        values = {**values, "updated_at": datetime.utcnow()}

        stmt = update(User).where(User.id == user.id)
        for column, value in (expected or {}).items():
            stmt = stmt.where(getattr(User, column) == value)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return False

        for column, value in values.items():
            set_committed_value(user, column, value)
        return True

    async def find_by_token_digest(
        self, digest_field: str, expiry_field: str, digest: str, now: datetime
    ) -> Optional[User]:
        """Get the user whose digest column matches and whose expiry is after now"""
        digest_column = getattr(User, digest_field)
        expiry_column = getattr(User, expiry_field)
        stmt = select(User).where(digest_column == digest, expiry_column > now)
        result = await self.session.exec(stmt)
        return result.first()
