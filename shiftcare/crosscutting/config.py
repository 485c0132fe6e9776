"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match current onboarding / check-in behavior

Collaborators:
  - container.py: reads settings to pick adapters (Redis vs in-memory)
  - application/usecases: receive limits (code TTL, password policy, retries)
    through constructor arguments, never by importing Settings directly
  - crosscutting/logger.py: log level and format

Constraints:
  - Lives in crosscutting layer, NOT in domain
  - No business logic — pure configuration

Notes:
  - Uses pydantic-settings for env parsing and validation
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        log_level: Root log level for the shiftcare logger (default: INFO)
        log_json: Emit JSON log lines (default: True)
        redis_url: Redis connection string for verification challenges (optional)
        email_code_ttl_minutes: Lifetime of an email verification code (default: 10)
        email_code_length: Digits in an email verification code (default: 6)
        password_min_length: Minimum password length on profile completion (default: 8)
        check_in_conflict_retries: Retries after a check-in version conflict (default: 1)
        allow_admin_self_registration: Accept "admin" on account type selection
    """

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Redis (verification challenges)
    redis_url: str = ""

    # Onboarding
    email_code_ttl_minutes: int = 10
    email_code_length: int = 6
    password_min_length: int = 8
    allow_admin_self_registration: bool = False

    # Check-in
    check_in_conflict_retries: int = 1

    @field_validator("email_code_ttl_minutes", "email_code_length")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("password_min_length")
    @classmethod
    def password_min_length_floor(cls, v: int) -> int:
        if v < 8:
            raise ValueError("password_min_length must be >= 8")
        return v

    @field_validator("check_in_conflict_retries")
    @classmethod
    def retries_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("check_in_conflict_retries must be >= 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_valid(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(
                "log_level must be DEBUG, INFO, WARNING, ERROR, or CRITICAL"
            )
        return level

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
