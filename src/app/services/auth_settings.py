"""
Authentication Settings

Immutable settings built once at startup and injected into every
component that signs, checks or delivers tokens.
"""

from datetime import timedelta

from pydantic import BaseModel, ConfigDict


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    jwt_algorithm: str = "HS256"
    access_token_secret: str
    access_token_expires: timedelta = timedelta(minutes=15)
    refresh_token_secret: str
    refresh_token_expires: timedelta = timedelta(days=10)
    temporary_token_expires: timedelta = timedelta(minutes=20)

    access_token_cookie: str = "accessToken"
    refresh_token_cookie: str = "refreshToken"
    cookie_secure: bool = True
    cookie_samesite: str = "lax"

    api_prefix: str = ""
    public_base_url: str = ""
    password_reset_redirect_url: str = ""

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        """Build settings from an ApplicationConfig-like object"""
        return cls(
            jwt_algorithm=config.JWT_ALGORITHM,
            access_token_secret=config.ACCESS_TOKEN_SECRET,
            access_token_expires=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_token_secret=config.REFRESH_TOKEN_SECRET,
            refresh_token_expires=timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS),
            temporary_token_expires=timedelta(
                minutes=config.TEMPORARY_TOKEN_EXPIRE_MINUTES
            ),
            access_token_cookie=config.ACCESS_TOKEN_COOKIE,
            refresh_token_cookie=config.REFRESH_TOKEN_COOKIE,
            cookie_secure=config.COOKIE_SECURE,
            cookie_samesite=config.COOKIE_SAMESITE,
            api_prefix=config.API_PREFIX,
            public_base_url=config.PUBLIC_BASE_URL,
            password_reset_redirect_url=config.PASSWORD_RESET_REDIRECT_URL,
        )
