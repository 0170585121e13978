from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from jose import JWTError, jwt

from src.app.services.auth_settings import AuthSettings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def generate_access_token(
    settings: AuthSettings,
    user_id: UUID,
    role: str,
    email: str,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Generate JWT access token

    Args:
        settings: Signing secret and default expiry
        user_id: User UUID
        role: User role (admin, project_admin, member)
        email: User email
        username: User username
        expires_delta: Override of the configured expiry

    Returns:
        JWT token string signed with the access secret
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "role": role,
        "email": email,
        "username": username,
        "type": ACCESS_TOKEN_TYPE,
        "jti": uuid4().hex,
        "exp": now + (expires_delta or settings.access_token_expires),
        "iat": now,
    }
    return jwt.encode(
        payload, settings.access_token_secret, algorithm=settings.jwt_algorithm
    )


def generate_refresh_token(
    settings: AuthSettings, user_id: UUID, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Generate JWT refresh token

    A random jti makes every token unique, even two minted for the same
    user within the same second.

    Returns:
        JWT token string signed with the refresh secret
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "type": REFRESH_TOKEN_TYPE,
        "jti": uuid4().hex,
        "exp": now + (expires_delta or settings.refresh_token_expires),
        "iat": now,
    }
    return jwt.encode(
        payload, settings.refresh_token_secret, algorithm=settings.jwt_algorithm
    )


def _verify(token: str, secret: str, algorithm: str, token_type: str) -> Optional[dict]:
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError:
        return None
    if payload.get("type") != token_type or "user_id" not in payload:
        return None
    return payload


def verify_access_token(settings: AuthSettings, token: str) -> Optional[dict]:
    """
    Verify and decode an access token

    Returns:
        Decoded payload dict or None if tampered, expired or not an access token
    """
    return _verify(
        token, settings.access_token_secret, settings.jwt_algorithm, ACCESS_TOKEN_TYPE
    )


def verify_refresh_token(settings: AuthSettings, token: str) -> Optional[dict]:
    """
    Verify and decode a refresh token

    Returns:
        Decoded payload dict or None if tampered, expired or not a refresh token
    """
    return _verify(
        token, settings.refresh_token_secret, settings.jwt_algorithm, REFRESH_TOKEN_TYPE
    )
