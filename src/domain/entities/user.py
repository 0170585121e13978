"""
User Entity

The account record: identity, credentials, one-time token digests and the
single active refresh token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - owns every piece of authentication state.

    Business Rules:
    - Email and username must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - Verification and reset tokens are stored as SHA-256 digests only,
      each paired with an absolute expiry
    - refresh_token holds the one active refresh token; writing a new
      value invalidates the previous one
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=64)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    role: UserRole = Field(default=UserRole.member)

    # Email verification
    email_verified: bool = Field(default=False)
    email_verification_token: Optional[str] = Field(
        default=None, index=True, max_length=64
    )
    email_verification_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Password reset
    password_reset_token: Optional[str] = Field(
        default=None, index=True, max_length=64
    )
    password_reset_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Session
    refresh_token: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_email_verified", "email_verified"),)
