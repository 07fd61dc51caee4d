"""Application settings using pydantic-settings.

Loads configuration from environment variables with .env file support.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,  # Allow both field name and alias
    )

    # Environment
    environment: Literal["development", "staging", "production", "testing"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # LLM Configuration
    # Supports: openai, openrouter, together, groq, ollama, or custom
    llm_provider: Literal["openai", "openrouter", "ollama", "together", "groq", "custom"] = Field(
        default="openai",
        description="LLM provider (openai, openrouter, ollama, together, groq, custom)",
    )
    llm_model: str = Field(
        default="gpt-4-0125-preview",
        description="Model name (provider-specific format)",
    )
    llm_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key for the LLM provider",
        validation_alias=AliasChoices("llm_api_key", "openai_api_key", "openrouter_api_key"),
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Custom base URL for OpenAI-compatible APIs",
    )

    # Federal Register
    federal_register_base_url: str = Field(
        default="https://www.federalregister.gov/api/v1",
        description="Federal Register API root",
    )

    # FRED (St. Louis Fed)
    fred_base_url: str = Field(
        default="https://api.stlouisfed.org/fred",
        description="FRED API root",
    )
    fred_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="FRED API key",
    )

    # Google Custom Search
    google_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Google API key for the Custom Search JSON API",
    )
    google_cse_id: str = Field(
        default="",
        description="Programmable Search Engine id (cx)",
        validation_alias=AliasChoices("google_cse_id", "google_cse_cx"),
    )
    google_cse_base_url: str = Field(
        default="https://www.googleapis.com/customsearch/v1",
        description="Custom Search JSON API endpoint",
    )

    # Tool adapters
    adapter_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="HTTP timeout for upstream data APIs",
    )

    # Orchestrator
    record_failure_notes: bool = Field(
        default=False,
        description="Append a minimal assistant note to the transcript when a cycle fails",
    )

    # MLflow (Observability)
    mlflow_tracking_uri: str = Field(
        default="sqlite:///mlflow.db",
        description="MLflow tracking server URI (use sqlite:///mlflow.db or http://localhost:5000)",
    )
    mlflow_experiment_name: str = Field(
        default="alfred",
        description="MLflow experiment name",
    )
    mlflow_traces_enabled: bool = Field(
        default=False,
        description="Emit MLflow spans for completions and tool invocations",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are loaded once and reused.
    """
    return Settings()
