"""Application configuration using Pydantic Settings."""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    GEMINI = "gemini"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "nutrilog"

    # LLM Provider Selection
    llm_provider: LLMProvider = LLMProvider.OPENAI

    # OpenAI Configuration
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini-2024-07-18"

    # Google Gemini Configuration
    google_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # LLM Settings
    llm_temperature: float = 0.0
    vision_max_tokens: int = 500
    recipe_temperature: float = 1.2

    # Meal images
    image_max_dimension: int = 800
    image_quality: float = 0.7
    max_upload_mb: int = 20

    # Day boundaries for the dashboard and calendar
    timezone: str = "UTC"

    # Access gate (shared passwords, not a security boundary)
    password_user: str = ""
    password_admin: str = ""

    # App
    debug: bool = False
    log_level: str = "INFO"
    app_name: str = "Nutrilog API"
    api_version: str = "1.0.0"

    @property
    def is_llm_configured(self) -> bool:
        """Check if the selected LLM provider is configured."""
        if self.llm_provider == LLMProvider.OPENAI:
            return bool(self.openai_api_key)
        elif self.llm_provider == LLMProvider.GEMINI:
            return bool(self.google_api_key)
        return False

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
