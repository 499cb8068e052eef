"""Google (Gemini) provider."""

from typing import Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from loguru import logger

from taskpilot.decomposition.models import ProviderConfig
from taskpilot.providers.base import DEFAULT_TEMPERATURE, AIProvider
from taskpilot.providers.errors import ErrorCategory

# Checked in order; subclasses before GoogleAPICallError
_EXCEPTION_CATEGORIES: list[tuple[type[BaseException], ErrorCategory]] = [
    (google_exceptions.ServiceUnavailable, ErrorCategory.OVERLOADED),
    (google_exceptions.ResourceExhausted, ErrorCategory.RATE_LIMIT),
    (google_exceptions.TooManyRequests, ErrorCategory.RATE_LIMIT),
    (google_exceptions.InvalidArgument, ErrorCategory.INVALID_REQUEST),
    (google_exceptions.BadRequest, ErrorCategory.INVALID_REQUEST),
    (google_exceptions.DeadlineExceeded, ErrorCategory.TIMEOUT),
    (google_exceptions.GoogleAPICallError, ErrorCategory.API_ERROR),
]


class GoogleProvider(AIProvider):
    """
    Provider backed by the Gemini API via ``google-generativeai``.

    The SDK keeps its API key in module-level configuration, so
    ``initialize`` configures it and the registry's one-instance-per-type
    rule keeps that configuration consistent.
    """

    provider_type = "google"
    display_name = "Gemini"
    default_model = "gemini-1.5-pro"

    def _create_client(self, config: ProviderConfig) -> Any:
        genai.configure(api_key=config.api_key)
        return genai

    async def _complete(
        self,
        system_prompt: str | None,
        user_message: str,
        max_tokens: int,
    ) -> str:
        client = self._require_client()

        generation_config: dict[str, Any] = {"max_output_tokens": max_tokens}
        if system_prompt is not None:
            generation_config["temperature"] = self._option("temperature", DEFAULT_TEMPERATURE)

        model = client.GenerativeModel(
            model_name=self.model,
            system_instruction=system_prompt,
        )

        logger.debug(f"Calling Gemini API ({self.model}, max_output_tokens={max_tokens})")
        response = await model.generate_content_async(
            user_message,
            generation_config=generation_config,
        )
        return response.text

    async def is_available(self) -> bool:
        """Check that the Gemini API is reachable.

        A one-token completion may legitimately come back without text
        (``MAX_TOKENS`` finish reason), so only the round trip is checked.
        """
        if self._config is None or not self._config.api_key or self._client is None:
            return False

        try:
            model = self._client.GenerativeModel(model_name=self.model)
            await model.generate_content_async(
                "test",
                generation_config={"max_output_tokens": 1},
            )
            return True
        except Exception as e:
            logger.debug(f"google availability probe failed: {e}")
            return False

    def _classify_vendor_error(self, error: BaseException) -> ErrorCategory | None:
        for exc_type, category in _EXCEPTION_CATEGORIES:
            if isinstance(error, exc_type):
                return category
        return None

    def _error_detail(self, error: BaseException) -> str:
        return str(getattr(error, "message", None) or error)
