"""Unit tests for settings."""

import pytest

from taskpilot.core.config import Settings, clear_settings_cache, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test provider settings come from the environment."""
        monkeypatch.setenv("AI_PROVIDER", "google")
        monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
        monkeypatch.setenv("GOOGLE_MODEL", "gemini-1.5-flash")

        settings = Settings(_env_file=None)

        assert settings.ai_provider == "google"
        assert settings.provider_credentials("google") == {
            "api_key": "g-key",
            "model": "gemini-1.5-flash",
        }

    def test_credentials_missing(self, settings: Settings) -> None:
        """Test missing credentials are None."""
        assert settings.provider_credentials("anthropic") == {"api_key": None, "model": None}

    def test_unknown_type_credentials(self, settings: Settings) -> None:
        """Test unknown provider types yield empty credentials."""
        assert settings.provider_credentials("openai") == {"api_key": None, "model": None}

    def test_type_name_normalised(self, make_settings) -> None:
        """Test type names are matched case-insensitively."""
        settings = make_settings(anthropic_api_key="sk-ant-x")

        assert settings.provider_credentials(" Anthropic ")["api_key"] == "sk-ant-x"

    def test_defaults(self, settings: Settings) -> None:
        """Test default values."""
        assert settings.taskpilot_default_num_tasks == 10
        assert settings.taskpilot_default_num_subtasks == 3
        assert settings.taskpilot_log_level == "INFO"

    def test_get_settings_cached(self) -> None:
        """Test get_settings returns a cached instance until cleared."""
        first = get_settings()

        assert get_settings() is first

        clear_settings_cache()
        assert get_settings() is not first
