"""
HomeKeep: Configuration settings.

Loads from environment variables (or a .env file) with sensible defaults.
Import the module-level ``settings`` instance rather than instantiating Settings.
"""

from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./homekeep.db"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # JWT secret for session token signing (required)
    jwt_secret_key: Optional[str] = None
    access_token_expire_hours: int = 24

    # Cookie settings for session auth
    # Set COOKIE_SECURE=false for local HTTP dev (default true for production)
    cookie_secure: bool = True
    cookie_samesite: str = "lax"

    # Frontend - comma-separated list in .env, e.g. CORS_ORIGINS=http://localhost:5173
    cors_origins: str = ""

    # Login throttling (slowapi syntax)
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/minute"

    # Dashboard: tasks due within this many days count as "due soon"
    due_soon_horizon_days: int = 7

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
