"""Configuration settings for LocalLens.

Loads environment variables (prefixed ``LOCALLENS_``) and an optional .env
file, and provides typed configuration.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LOCALLENS_",
        env_file=".env",
        extra="ignore",
    )

    # Image description service
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("LOCALLENS_API_KEY", "GEMINI_API_KEY", "API_KEY"),
        description="API key for the image description service",
    )
    description_model: str = Field(
        default="gemini-2.5-flash", description="Model used to describe images"
    )
    description_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the image description REST API",
    )
    description_timeout: float = Field(
        default=30.0, description="Image description request timeout in seconds"
    )

    # Storage
    store_path: str = Field(
        default="data/local_lens_store.json",
        description="Path of the JSON key-value store file",
    )
    default_shop_id: str = Field(
        default="my-local-shop",
        description="Shop id used when a request does not name one",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
