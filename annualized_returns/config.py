"""
Configuration Management Module

Environment-driven settings for the calculator web app, read with
pydantic-settings. Every variable is prefixed ``ANNUALIZED_RETURNS_``.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Calculator app configuration"""

    model_config = SettingsConfigDict(
        env_prefix="ANNUALIZED_RETURNS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False

    # Browser origins allowed to call /api/*
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # json or text


settings = Settings()


def get_settings() -> Settings:
    """Get global settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment"""
    global settings
    settings = Settings()
    return settings
