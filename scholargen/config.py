"""Typed settings configuration - single source of truth."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Persistence
    storage_backend: Literal["memory", "redis", "sql"] = "sql"
    storage_key: str = "scholargen_papers_v1"
    database_url: str = "sqlite:///scholargen.db"
    redis_url: str | None = None

    # Text generation backend
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    generation_temperature: float = 0.7
    generation_max_tokens: int = 16000

    # Diagram rendering engine
    diagram_engine: Literal["kroki", "mmdc"] = "kroki"
    kroki_url: str = "https://kroki.io"
    mmdc_path: str = "mmdc"
    diagram_theme: str = "neutral"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
