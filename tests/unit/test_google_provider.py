"""Unit tests for GoogleProvider."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from google.api_core import exceptions as google_exceptions

from taskpilot.decomposition.models import ProviderConfig
from taskpilot.providers.errors import ErrorCategory, ProviderRequestError
from taskpilot.providers.google_provider import GoogleProvider


@pytest.fixture
def genai() -> MagicMock:
    """Mock google.generativeai module."""
    genai = MagicMock()
    genai.GenerativeModel.return_value.generate_content_async = AsyncMock()
    return genai


@pytest.fixture
def generate(genai: MagicMock) -> AsyncMock:
    """The mocked generate_content_async coroutine."""
    return genai.GenerativeModel.return_value.generate_content_async


@pytest_asyncio.fixture
async def provider(genai: MagicMock) -> GoogleProvider:
    """Initialized provider using the mock SDK."""
    with patch("taskpilot.providers.google_provider.genai", genai):
        provider = GoogleProvider()
        await provider.initialize(ProviderConfig(api_key="g-test"))

    genai.configure.assert_called_once_with(api_key="g-test")
    return provider


class TestGoogleProvider:
    """Tests for GoogleProvider operations."""

    @pytest.mark.asyncio
    async def test_generate_tasks(self, provider, genai, generate, tasks_payload) -> None:
        """Test tasks are parsed and the system instruction is set."""
        generate.return_value = SimpleNamespace(text=json.dumps(tasks_payload))

        tasks = await provider.generate_tasks("Build a todo API", num_tasks=3)

        assert len(tasks) == 3
        model_kwargs = genai.GenerativeModel.call_args.kwargs
        assert model_kwargs["model_name"] == "gemini-1.5-pro"
        assert "create 3 well-structured" in model_kwargs["system_instruction"]

        args, kwargs = generate.await_args
        assert args[0] == "Build a todo API"
        assert kwargs["generation_config"] == {"max_output_tokens": 4000, "temperature": 0.7}

    @pytest.mark.asyncio
    async def test_analyze_complexity(self, provider, generate, sample_task) -> None:
        """Test complexity analysis."""
        generate.return_value = SimpleNamespace(
            text='{"score": 3, "explanation": "Small", "factors": {"scope": "one file"}}'
        )

        analysis = await provider.analyze_complexity(sample_task)

        assert analysis.score == 3
        assert analysis.factors.scope == "one file"
        assert analysis.factors.risks == ""

    @pytest.mark.asyncio
    async def test_vendor_error_rewrapped(self, provider, generate) -> None:
        """Test Google API errors are translated."""
        generate.side_effect = google_exceptions.ServiceUnavailable("model overloaded")

        with pytest.raises(ProviderRequestError) as exc_info:
            await provider.generate_tasks("PRD")

        assert exc_info.value.category == ErrorCategory.OVERLOADED
        assert exc_info.value.message.startswith("Gemini is currently experiencing high demand")

    @pytest.mark.asyncio
    async def test_is_available(self, provider, generate) -> None:
        """Test the one-token probe."""
        generate.return_value = SimpleNamespace()

        assert await provider.is_available() is True
        assert generate.await_args.kwargs["generation_config"] == {"max_output_tokens": 1}

    @pytest.mark.asyncio
    async def test_is_available_false_on_error(self, provider, generate) -> None:
        """Test probe failures collapse to False."""
        generate.side_effect = google_exceptions.PermissionDenied("API key not valid")

        assert await provider.is_available() is False

    @pytest.mark.asyncio
    async def test_is_available_uninitialized(self) -> None:
        """Test an uninitialized provider is unavailable."""
        assert await GoogleProvider().is_available() is False


class TestGoogleErrors:
    """Tests for Google error classification."""

    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (google_exceptions.ServiceUnavailable("busy"), ErrorCategory.OVERLOADED),
            (google_exceptions.ResourceExhausted("quota"), ErrorCategory.RATE_LIMIT),
            (google_exceptions.TooManyRequests("slow down"), ErrorCategory.RATE_LIMIT),
            (google_exceptions.InvalidArgument("bad field"), ErrorCategory.INVALID_REQUEST),
            (google_exceptions.DeadlineExceeded("deadline"), ErrorCategory.TIMEOUT),
            (google_exceptions.PermissionDenied("denied"), ErrorCategory.API_ERROR),
            (RuntimeError("network unreachable"), ErrorCategory.NETWORK),
            (RuntimeError("boom"), ErrorCategory.UNKNOWN),
        ],
    )
    def test_classify(self, error, category) -> None:
        """Test exceptions map to categories."""
        assert GoogleProvider().classify_error(error) == category

    def test_api_error_message(self) -> None:
        """Test API errors carry the vendor message."""
        message = GoogleProvider().handle_error(google_exceptions.PermissionDenied("denied"))

        assert message == "Gemini API error: denied"

    def test_generic_message(self) -> None:
        """Test generic fallback."""
        assert GoogleProvider().handle_error(RuntimeError("boom")) == (
            "Error communicating with Gemini: boom"
        )
