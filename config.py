import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Session tokens
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_SECRET = data.get("ACCESS_TOKEN_SECRET", "dev-access-secret-change-in-production")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    REFRESH_TOKEN_SECRET = data.get("REFRESH_TOKEN_SECRET", "dev-refresh-secret-change-in-production")
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 10))

    # Email verification / password reset tokens
    TEMPORARY_TOKEN_EXPIRE_MINUTES = int(data.get("TEMPORARY_TOKEN_EXPIRE_MINUTES", 20))

    # Token cookies
    ACCESS_TOKEN_COOKIE = data.get("ACCESS_TOKEN_COOKIE", "accessToken")
    REFRESH_TOKEN_COOKIE = data.get("REFRESH_TOKEN_COOKIE", "refreshToken")
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", True))
    COOKIE_SAMESITE = data.get("COOKIE_SAMESITE", "lax")

    # Links embedded in outgoing mail
    PUBLIC_BASE_URL = data.get("PUBLIC_BASE_URL", "")
    PASSWORD_RESET_REDIRECT_URL = data.get("PASSWORD_RESET_REDIRECT_URL", "")

    # Mail delivery
    SMTP_HOST = data.get("SMTP_HOST", "localhost")
    SMTP_PORT = int(data.get("SMTP_PORT", 2525))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", False))
    MAIL_FROM = data.get("MAIL_FROM", "mail.taskmanager@example.com")
    MAIL_PRODUCT_NAME = data.get("MAIL_PRODUCT_NAME", "Task Manager")
    MAIL_PRODUCT_LINK = data.get("MAIL_PRODUCT_LINK", "https://taskmanagelink.com")
