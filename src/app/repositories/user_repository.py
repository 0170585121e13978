from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_email_or_username(
        self, email: str, username: str
    ) -> Optional[User]:
        """Get a user holding either the email or the username"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user (full record validation)"""
        pass

    @abstractmethod
    async def update_fields(
        self,
        user: User,
        values: Dict[str, Any],
        expected: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Partial update of a single user row.

        Contract:
        - Writes only the columns named in ``values`` (plus updated_at)
        - Skips whole-record validation; callers own the fields they write
        - When ``expected`` is given, the row is written only if every named
          column still holds the expected value (compare-and-set)

        Returns:
            True if the row was written, False otherwise
        """
        pass

    @abstractmethod
    async def find_by_token_digest(
        self, digest_field: str, expiry_field: str, digest: str, now: datetime
    ) -> Optional[User]:
        """Get the user whose digest column matches and whose expiry is after now"""
        pass
