"""Application settings and configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Completion provider (any OpenAI-compatible endpoint; Groq by default)
    groq_api_key: str = Field(default="", description="Groq API key")
    groq_model: str = Field(default="llama-3.3-70b-versatile", description="Model used for job analysis")
    groq_base_url: str = Field(default="https://api.groq.com/openai/v1", description="OpenAI-compatible base URL")

    # Fixed per process, never taken from a request
    analysis_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    analysis_max_tokens: int = Field(default=1000, gt=0)
    analysis_profile: bool = Field(default=False, description="Append per-call timings to logs/api_profile.jsonl")

    # Sentry
    sentry_dsn: str = Field(default="", description="Sentry DSN — empty string disables Sentry")
    sentry_environment: str = Field(default="development", description="Sentry environment tag (e.g. production, development)")

    # Logging / paths
    log_level: str = Field(default="INFO")
    logs_dir: Path = Field(default=Path("logs"), description="Directory for log files")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)


settings = Settings()
