from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration sourced from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_prefix="CLINICLEADS_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["local", "test", "production"] = "local"
    app_name: str = "ClinicLeads Landing Page API"
    api_version: str = "0.1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_json: bool = False
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost",
            "http://localhost:5173",
            "http://127.0.0.1",
            "http://127.0.0.1:5173",
        ]
    )
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    database_url: str = Field(..., description="SQLAlchemy-compatible database URL.")
    db_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    openrouter_api_key: str | None = Field(
        default=None,
        description="Bearer credential for the chat-completion endpoint.",
    )
    openrouter_endpoint: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the OpenAI-compatible chat-completion API.",
    )
    openrouter_model: str = Field(
        default="meta-llama/llama-3.3-8b-instruct:free",
        description="Model identifier sent with every landing page generation request.",
    )
    openrouter_max_tokens: int = Field(
        default=12000,
        ge=256,
        le=64000,
        description="Upper bound on completion tokens for a single landing page.",
    )
    openrouter_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    openrouter_top_p: float = Field(default=0.9, gt=0.0, le=1.0)
    openrouter_request_timeout_seconds: float = Field(
        default=90.0,
        ge=1.0,
        description="Timeout for outbound requests to the chat-completion endpoint.",
    )
    expose_generation_debug: bool = Field(
        default=False,
        description="Include the raw model completion in error responses (operators only).",
    )
    default_practice_website: str = Field(
        default="https://www.exhalesinus.com/",
        description="Website used when a doctor profile does not list one.",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # pyright: ignore[reportCallIssue]


__all__ = ["Settings", "get_settings"]
