from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process configuration, read once from the environment at startup."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, frozen=True, extra="ignore")

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=0, le=65535)
    shutdown_timeout: float = 10.0
    public_dir: str = "public"
    cors_origins: list[str] = ["*"]

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("app_env", "node_env", "environment"),
    )

    # Build metadata reported by GET /
    welcome_message: str = "🚀 OpenShift Python BuildConfig Demo"
    build_type: str = "Source-to-Image (S2I)"
    base_image: str = "python:3.12-ubi9"
    build_source: str = "GitHub Repository"

    # Observability
    log_level: str = "INFO"
    log_format: str = "text"
    access_log: bool = False

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v

    @field_validator("shutdown_timeout")
    @classmethod
    def check_shutdown_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("shutdown_timeout must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
