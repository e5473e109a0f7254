from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    # Database - single SQLite file by default, override with environment variable
    DATABASE_URL: str = "sqlite:///./leadintake.db"

    # Admin API shared secret (sent as x-admin-key). Empty means admin API is locked.
    ADMIN_KEY: str = ""

    # Admin UI lock (HTTP Basic)
    ADMIN_USER: str = ""
    ADMIN_PASS: str = ""
    ADMIN_UI_DIR: str = "./admin"

    # JWT for user accounts
    SECRET_KEY: str = "your-secret-key-here"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Resend (Email)
    RESEND_API_KEY: str = ""
    EMAIL_FROM: str = ""
    SITE_NAME: str = "ZigaSwift"

    # Redis (rate limiting + Celery broker)
    REDIS_URL: str = "redis://localhost:6379"
    CELERY_TASK_ALWAYS_EAGER: bool = False

    # Rate limiting, per client address
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    TRUST_PROXY: bool = True

    # Request/response bounds
    MAX_BODY_BYTES: int = 200 * 1024
    LIST_LIMIT_MAX: int = 200

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://bernard0816.github.io",
        "https://zigaswift-backend.onrender.com",
        "https://zigaswift-backend-1.onrender.com",
    ]

    class Config:
        env_file = Path(__file__).parent.parent.parent / ".env"
        env_file_encoding = 'utf-8'


settings = Settings()
