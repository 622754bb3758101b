"""Configuration settings for Session Auth."""

import os
import secrets
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./session_auth.db")

    # JWT
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", secrets.token_urlsafe(32))
    JWT_REFRESH_SECRET_KEY: str = os.getenv("JWT_REFRESH_SECRET_KEY", secrets.token_urlsafe(32))
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_AUDIENCE: str = os.getenv("JWT_AUDIENCE", "user")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
    REFRESH_TOKEN_EXPIRE_DAYS: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "30"))

    # Passwords
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Email (Resend)
    RESEND_API_KEY: str = os.getenv("RESEND_API_KEY", "")
    RESEND_API_URL: str = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
    EMAIL_SENDER: str = os.getenv("EMAIL_SENDER", "")

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    PASSWORD_RESET_RATE_LIMIT: str = os.getenv("PASSWORD_RESET_RATE_LIMIT", "2/5 minutes")

    # Expired session and verification code sweep
    SWEEP_INTERVAL_MINUTES: float = float(os.getenv("SWEEP_INTERVAL_MINUTES", "60"))

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    APP_ORIGIN: str = os.getenv("APP_ORIGIN", "http://localhost:5173")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if not os.getenv("JWT_SECRET_KEY"):
            errors.append("JWT_SECRET_KEY is not set - using auto-generated key (not persistent across restarts)")
        if not os.getenv("JWT_REFRESH_SECRET_KEY"):
            errors.append(
                "JWT_REFRESH_SECRET_KEY is not set - using auto-generated key (not persistent across restarts)"
            )
        if self.JWT_SECRET_KEY == self.JWT_REFRESH_SECRET_KEY:
            errors.append("JWT_SECRET_KEY and JWT_REFRESH_SECRET_KEY must differ")
        if not self.RESEND_API_KEY:
            errors.append("RESEND_API_KEY is not set - verification and reset emails will not be delivered")
        if not self.is_development and not self.EMAIL_SENDER:
            errors.append("EMAIL_SENDER is not set")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
