"""
Centralized configuration for the mentor services.

All settings are loaded from environment variables with sensible defaults.
API keys themselves are NOT settings: they are read by the credentials module
through its lookup strategies, so that both the runtime environment and the
bundle-injected namespace can supply them.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credential pools
    credential_master_var: str = "API_KEY"
    credential_env_prefixes: list[str] = ["", "VITE_"]
    credential_min_length: int = 10  # values this short are placeholders

    # Conversational completion
    text_model: str = "gemini-3-pro-preview"
    text_max_output_tokens: int = 8192
    text_temperature: float = 0.7
    text_thinking_budget: int | None = 2048

    # Structured outline
    outline_model: str = "gemini-2.5-flash"

    # Session store
    session_store_path: str = ".mentor/session_store.json"
    session_latency_seconds: float = 0.8
    session_short_latency_seconds: float = 0.2


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
