"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    # Provider selection
    ai_provider: str | None = Field(
        default=None,
        description="Preferred provider type (anthropic, google)",
    )

    # Anthropic API
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        description="Anthropic API key for Claude access",
    )
    anthropic_model: str | None = Field(
        default=None,
        description="Claude model override",
    )

    # Google Generative AI
    google_api_key: SecretStr | None = Field(
        default=None,
        description="Google API key for Gemini access",
    )
    google_model: str | None = Field(
        default=None,
        description="Gemini model override",
    )

    # TaskPilot Configuration
    taskpilot_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    taskpilot_debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    taskpilot_log_dir: str = Field(
        default="logs",
        description="Directory for rotated log files",
    )
    taskpilot_default_num_tasks: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of tasks requested when parsing a PRD",
    )
    taskpilot_default_num_subtasks: int = Field(
        default=3,
        ge=1,
        le=50,
        description="Number of subtasks requested when expanding a task",
    )

    def provider_credentials(self, provider_type: str) -> dict[str, str | None]:
        """Get the API key and model configured for a provider type.

        Looks up ``<type>_api_key`` and ``<type>_model``, so unknown types
        simply yield empty credentials.

        Args:
            provider_type: Provider type name, e.g. ``"anthropic"``.

        Returns:
            Dict with ``api_key`` and ``model`` entries (either may be None).

        Example:
            >>> settings = get_settings()
            >>> settings.provider_credentials("anthropic")["model"]
        """
        prefix = provider_type.strip().lower()
        api_key = getattr(self, f"{prefix}_api_key", None)
        model = getattr(self, f"{prefix}_model", None)

        if isinstance(api_key, SecretStr):
            api_key = api_key.get_secret_value()

        return {
            "api_key": api_key or None,
            "model": model or None,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> settings.taskpilot_default_num_tasks
        10
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
