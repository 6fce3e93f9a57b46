# safepsy_api/config.py
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_SALT_LENGTH = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App Settings
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 3001
    frontend_url: Optional[str] = None
    cors_origins: List[str] = [
        "http://localhost:3000",  # React dev server
        "http://localhost:5173",  # Vite dev server
    ]
    max_body_bytes: int = Field(default=10 * 1024, gt=0)

    # Database Settings
    database_url: Optional[str] = None
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_command_timeout: int = 60
    auto_create_tables: bool = False

    # IP Hashing (privacy by default)
    ip_hashing_enabled: bool = False
    ip_salt: Optional[str] = None

    # Rate Limiting
    rate_limit_max_requests: int = Field(default=5, gt=0)
    rate_limit_window_seconds: int = Field(default=900, gt=0)

    @model_validator(mode="after")
    def check_ip_salt(self) -> "Settings":
        """Refuse to start with hashing enabled but an insecure salt"""
        if self.ip_hashing_enabled and (not self.ip_salt or len(self.ip_salt) < MIN_SALT_LENGTH):
            raise ValueError(
                f"IP_SALT must be at least {MIN_SALT_LENGTH} characters when IP_HASHING_ENABLED is true "
                "(generate one with: openssl rand -hex 32)"
            )
        return self

    @property
    def allowed_origins(self) -> List[str]:
        origins = list(self.cors_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.insert(0, self.frontend_url)
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
