from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class InMemoryUserRepository(IUserRepository):
    """Dict-backed IUserRepository honouring the partial-update contract"""

    def __init__(self):
        self.rows: Dict[UUID, User] = {}

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.rows.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.rows.values() if u.email == email), None)

    async def get_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        return next(
            (u for u in self.rows.values() if u.email == email or u.username == username),
            None,
        )

    async def create(self, user: User) -> User:
        self.rows[user.id] = user
        return user

    async def update_fields(
        self,
        user: User,
        values: Dict[str, Any],
        expected: Optional[Dict[str, Any]] = None,
    ) -> bool:
        stored = self.rows.get(user.id)
        if stored is None:
            return False
        for column, value in (expected or {}).items():
            if getattr(stored, column) != value:
                return False
        for column, value in values.items():
            setattr(stored, column, value)
            setattr(user, column, value)
        return True

    async def find_by_token_digest(
        self, digest_field: str, expiry_field: str, digest: str, now: datetime
    ) -> Optional[User]:
        for user in self.rows.values():
            expires_at = getattr(user, expiry_field)
            if getattr(user, digest_field) == digest and expires_at is not None and expires_at > now:
                return user
        return None
