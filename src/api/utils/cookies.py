"""
Token cookies.

Access and refresh tokens travel in two HTTP-only, secure cookies. This
module only moves tokens between the request/response and the caller; it
performs no token logic.
"""

from typing import Optional

from fastapi import Request, Response

from src.app.services.auth_settings import AuthSettings


def read_refresh_token(
    request: Request, settings: AuthSettings, body_token: Optional[str] = None
) -> Optional[str]:
    """Refresh token from the cookie, falling back to the request body"""
    return request.cookies.get(settings.refresh_token_cookie) or body_token or None


def read_access_token(request: Request, settings: AuthSettings) -> Optional[str]:
    return request.cookies.get(settings.access_token_cookie) or None


def _cookie_options(settings: AuthSettings) -> dict:
    return {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": settings.cookie_samesite,
        "path": "/",
    }


def set_token_cookies(
    response: Response, settings: AuthSettings, access_token: str, refresh_token: str
) -> None:
    options = _cookie_options(settings)
    response.set_cookie(
        settings.access_token_cookie,
        access_token,
        max_age=int(settings.access_token_expires.total_seconds()),
        **options,
    )
    response.set_cookie(
        settings.refresh_token_cookie,
        refresh_token,
        max_age=int(settings.refresh_token_expires.total_seconds()),
        **options,
    )


def clear_token_cookies(response: Response, settings: AuthSettings) -> None:
    options = _cookie_options(settings)
    response.delete_cookie(settings.access_token_cookie, **options)
    response.delete_cookie(settings.refresh_token_cookie, **options)
