from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    smtp_base_url: str = "http://smtp-mock:8025"

    # Public links
    public_scheme: str = "https"
    public_host: str = "uaa.example.com"

    # Tenancy / branding
    default_zone_id: str = "uaa"
    default_zone_name: str = "uaa"
    brand: Literal["oss", "pivotal"] = "oss"

    # Security / policies
    bcrypt_rounds: int = 12
    code_ttl_seconds: int = 3600
    password_min_length: int = 8
    password_max_length: int = 255
    password_require_uppercase: int = 0
    password_require_lowercase: int = 0
    password_require_digit: int = 0
    password_require_special: int = 0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
