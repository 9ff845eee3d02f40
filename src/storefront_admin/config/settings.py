"""Application settings for storefront-admin.

Settings are read from the environment (and an optional ``.env`` file)
through pydantic-settings.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Runtime configuration for the admin backend."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core Application Settings
    app_name: str = Field(default="storefront-admin")
    app_version: str = Field(default="0.3.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # Database Configuration
    database_url: Optional[SecretStr] = Field(default=None)
    db_pool_min_size: int = Field(default=2)
    db_pool_max_size: int = Field(default=10)
    db_command_timeout: float = Field(default=30.0)

    # Session Configuration
    session_cookie_name: str = Field(default="session_token")
    session_ttl_days: int = Field(default=7)

    # Credential Configuration (scrypt cost parameters)
    password_min_length: int = Field(default=8)
    scrypt_n: int = Field(default=16384)
    scrypt_r: int = Field(default=8)
    scrypt_p: int = Field(default=1)
    scrypt_key_length: int = Field(default=64)
    scrypt_salt_length: int = Field(default=32)

    # Cache Configuration
    cache_ttl_default: int = Field(default=300)  # 5 minutes
    cache_ttl_settings: int = Field(default=600)  # 10 minutes

    # Event Bus Configuration
    event_max_listeners: int = Field(default=50)

    # Category tree traversal
    category_max_depth: int = Field(default=32)

    # CORS Configuration
    cors_origins: List[str] = Field(default_factory=list)

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("session_ttl_days", "cache_ttl_default", "cache_ttl_settings", "event_max_listeners")
    @classmethod
    def must_be_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment in ("development", "dev", "local")

    @property
    def cookie_secure(self) -> bool:
        """Session cookies carry the secure flag everywhere except development."""
        return not self.is_development

    def get_database_dsn(self) -> str:
        if self.database_url is None:
            raise ValueError("DATABASE_URL is not configured")
        return self.database_url.get_secret_value()


@lru_cache()
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
