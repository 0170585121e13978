from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request, Response, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.api.error import raise_for_error
from src.api.utils.cookies import clear_token_cookies, read_refresh_token, set_token_cookies
from src.app.services.auth_settings import AuthSettings
from src.app.services.mailer import MailDispatcher
from src.app.services.password_hasher import MAX_PASSWORD_BYTES, password_too_long
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    VerifyEmailUseCase,
    ResendVerificationUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    RegisterResponse,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
    VerifyEmailResponse,
    ResendVerificationResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
    ChangePasswordResponse,
    UserSummary,
)
from src.depends import (
    get_auth_settings,
    get_current_user_id,
    get_link_base,
    get_mail_dispatcher,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _check_password_bytes(value: str) -> str:
    if password_too_long(value):
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    username: str = Field(..., min_length=3, max_length=64, description="Lowercase username")
    password: str = Field(..., min_length=1, description="User password")

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("username")
    @classmethod
    def username_must_be_lowercase(cls, value: str) -> str:
        if value != value.lower():
            raise ValueError("Username must be in lower case")
        return value

    password_within_limit = field_validator("password")(_check_password_bytes)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
    link_base: str = Depends(get_link_base),
):
    """
    User Registration

    Creates the account and mails an email verification link.

    Raises:
        - 409 Conflict: Email or username already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        email=request.email,
        username=request.username,
        password=request.password,
    )

    use_case = RegisterUseCase(uow, settings, dispatcher)
    result = await use_case.execute(command, link_base)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")

    password_within_limit = field_validator("password")(_check_password_bytes)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Login

    Sets the access and refresh token cookies and echoes both tokens.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 500 Internal Server Error: Tokens could not be stored
    """
    use_case = LoginUseCase(uow, settings)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        raise_for_error(result.error)

    set_token_cookies(
        response, settings, result.value.access_token, result.value.refresh_token
    )
    return result.value


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload (used when no cookie is sent)"""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: Optional[str] = Field(None, alias="refreshToken", description="Refresh token")


@router.post(
    "/refresh-token", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse
)
async def refresh(
    http_request: Request,
    response: Response,
    request: Optional[RefreshRequest] = Body(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Refresh Tokens

    Reads the refresh token from its cookie, falling back to the body.
    Rotates it and sets both cookies again.

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or superseded token
    """
    body_token = request.refresh_token if request else None
    refresh_token = read_refresh_token(http_request, settings, body_token)

    use_case = RefreshTokenUseCase(uow, settings)
    result = await use_case.execute(refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    set_token_cookies(
        response, settings, result.value.access_token, result.value.refresh_token
    )
    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """Clear the stored refresh token and both token cookies"""
    use_case = LogoutUseCase(uow, settings)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    clear_token_cookies(response, settings)
    return result.value


@router.get(
    "/current-user", status_code=status.HTTP_200_OK, response_model=UserSummary
)
async def current_user(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User

    Raises:
        - 401 Unauthorized: Invalid or expired access token
        - 404 Not Found: User no longer exists
    """
    use_case = GetCurrentUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/verify-email/{verification_token}",
    status_code=status.HTTP_200_OK,
    response_model=VerifyEmailResponse,
)
async def verify_email(
    verification_token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Email Verification

    Target of the link mailed on registration.

    Raises:
        - 401 Unauthorized: Token unknown, used or expired
    """
    use_case = VerifyEmailUseCase(uow, settings)
    result = await use_case.execute(verification_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/resend-email-verification",
    status_code=status.HTTP_200_OK,
    response_model=ResendVerificationResponse,
)
async def resend_email_verification(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
    link_base: str = Depends(get_link_base),
):
    """
    Resend Verification Email

    Raises:
        - 404 Not Found: User no longer exists
        - 409 Conflict: Email is already verified
    """
    use_case = ResendVerificationUseCase(uow, settings, dispatcher)
    result = await use_case.execute(user_id, link_base)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    dispatcher: MailDispatcher = Depends(get_mail_dispatcher),
    link_base: str = Depends(get_link_base),
):
    """
    Request Password Reset

    Security:
        - No email enumeration (same response for valid/invalid emails)
    """
    use_case = RequestPasswordResetUseCase(uow, settings, dispatcher)
    result = await use_case.execute(request.email, link_base)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=1, description="New password")

    password_within_limit = field_validator("new_password")(_check_password_bytes)


@router.post(
    "/reset-password/{reset_token}",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_forgotten_password(
    reset_token: str,
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Confirm Password Reset

    Raises:
        - 401 Unauthorized: Token unknown, used or expired
    """
    use_case = ConfirmPasswordResetUseCase(uow, settings)
    result = await use_case.execute(reset_token, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)

    password_within_limit = field_validator("old_password", "new_password")(_check_password_bytes)


@router.post(
    "/change-password",
    status_code=status.HTTP_200_OK,
    response_model=ChangePasswordResponse,
)
async def change_current_password(
    request: ChangePasswordRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Password

    Raises:
        - 401 Unauthorized: Old password does not match
        - 404 Not Found: User no longer exists
    """
    use_case = ChangePasswordUseCase(uow)
    result = await use_case.execute(user_id, request.old_password, request.new_password)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
