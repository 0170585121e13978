"""Action URLs embedded in outgoing mail."""

from src.app.services.auth_settings import AuthSettings


def verification_url(link_base: str, token: str) -> str:
    return f"{link_base.rstrip('/')}/auth/verify-email/{token}"


def password_reset_url(settings: AuthSettings, link_base: str, token: str) -> str:
    # A front-end page takes over the reset form when configured
    if settings.password_reset_redirect_url:
        return f"{settings.password_reset_redirect_url.rstrip('/')}/{token}"
    return f"{link_base.rstrip('/')}/auth/reset-password/{token}"
