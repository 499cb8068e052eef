"""Core components: configuration, logging and the application context."""

from taskpilot.core.config import Settings, clear_settings_cache, get_settings

__all__ = ["Settings", "clear_settings_cache", "get_settings"]
