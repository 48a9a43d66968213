"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_endpoint: str = "https://api.openai.com/v1"
    openai_key: SecretStr
    openai_embeddings_deployment: str = "text-embedding-3-small"
    openai_completions_deployment: str = "gpt-4o-mini"
    # Kept as a string: the pipeline parses it and falls back to 8191.
    openai_max_tokens: str = "8191"
    openai_api_version: str = "2024-06-01"
    openai_max_retries: int = 10
    request_timeout_seconds: float = 60.0
    max_history_tokens: int = 12_000
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
