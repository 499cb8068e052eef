"""Anthropic (Claude) provider."""

from typing import Any

from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncAnthropic,
)
from loguru import logger

from taskpilot.decomposition.models import ProviderConfig
from taskpilot.providers.base import DEFAULT_TEMPERATURE, AIProvider
from taskpilot.providers.errors import ErrorCategory

# Enables 128k token output on supported models
ANTHROPIC_BETA_HEADER = "output-128k-2025-02-19"

_ERROR_TYPE_CATEGORIES = {
    "overloaded_error": ErrorCategory.OVERLOADED,
    "rate_limit_error": ErrorCategory.RATE_LIMIT,
    "invalid_request_error": ErrorCategory.INVALID_REQUEST,
}

_STATUS_CATEGORIES = {
    529: ErrorCategory.OVERLOADED,
    429: ErrorCategory.RATE_LIMIT,
    400: ErrorCategory.INVALID_REQUEST,
}


def _error_body(error: BaseException) -> dict[str, Any] | None:
    """Structured ``{"type": "error", "error": {...}}`` body, if any."""
    body = getattr(error, "body", None)
    if isinstance(body, dict) and body.get("type") == "error" and isinstance(body.get("error"), dict):
        return body["error"]
    return None


class AnthropicProvider(AIProvider):
    """
    Provider backed by the Anthropic Messages API.

    Example:
        >>> provider = AnthropicProvider()
        >>> await provider.initialize(ProviderConfig(api_key="sk-ant-..."))
        >>> await provider.is_available()
        True
    """

    provider_type = "anthropic"
    display_name = "Claude"
    default_model = "claude-3-7-sonnet-20250219"

    def _create_client(self, config: ProviderConfig) -> AsyncAnthropic:
        return AsyncAnthropic(
            api_key=config.api_key,
            default_headers={"anthropic-beta": ANTHROPIC_BETA_HEADER},
        )

    async def _complete(
        self,
        system_prompt: str | None,
        user_message: str,
        max_tokens: int,
    ) -> str:
        client = self._require_client()

        request: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": user_message}],
        }
        if system_prompt is not None:
            request["system"] = system_prompt
            request["temperature"] = self._option("temperature", DEFAULT_TEMPERATURE)

        logger.debug(f"Calling Claude API ({self.model}, max_tokens={max_tokens})")
        response = await client.messages.create(**request)

        # Skip thinking blocks
        for block in response.content:
            if getattr(block, "type", "text") == "text":
                return block.text
        return ""

    def _classify_vendor_error(self, error: BaseException) -> ErrorCategory | None:
        body = _error_body(error)
        if body is not None:
            return _ERROR_TYPE_CATEGORIES.get(body.get("type"), ErrorCategory.API_ERROR)

        if isinstance(error, APITimeoutError):
            return ErrorCategory.TIMEOUT
        if isinstance(error, APIConnectionError):
            return ErrorCategory.NETWORK
        if isinstance(error, APIStatusError):
            return _STATUS_CATEGORIES.get(error.status_code, ErrorCategory.API_ERROR)
        return None

    def _error_detail(self, error: BaseException) -> str:
        body = _error_body(error)
        if body is not None and body.get("message"):
            return str(body["message"])
        return str(getattr(error, "message", error))
