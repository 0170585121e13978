"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime

from pydantic import BaseModel

from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    email: str
    username: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserSummary(BaseModel):
    """
    Public projection of a User.

    Never carries the password hash, the refresh token, or any one-time
    token digest or expiry.
    """

    id: str
    email: str
    username: str
    role: str
    email_verified: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=str(user.id),
            email=user.email,
            username=user.username,
            role=user.role.value,
            email_verified=user.email_verified,
            created_at=user.created_at,
        )


class StatusResponse(BaseModel):
    status: str
    message: str


class RegisterResponse(BaseModel):
    """Response for registration use case"""

    user: UserSummary
    message: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserSummary
    access_token: str
    refresh_token: str


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    refresh_token: str


class LogoutResponse(StatusResponse):
    """Response for logout use case"""


class VerifyEmailResponse(StatusResponse):
    """Response for email verification use case"""


class ResendVerificationResponse(StatusResponse):
    """Response for resend verification email use case"""


class RequestPasswordResetResponse(StatusResponse):
    """Response for forgot password use case"""


class ConfirmPasswordResetResponse(StatusResponse):
    """Response for reset forgotten password use case"""


class ChangePasswordResponse(StatusResponse):
    """Response for change current password use case"""
