"""AI provider layer.

Concrete providers wrap vendor SDKs behind the ``AIProvider`` contract;
the ``ProviderRegistry`` selects, caches and health-checks them.
"""

from taskpilot.providers.anthropic_provider import AnthropicProvider
from taskpilot.providers.base import AIProvider
from taskpilot.providers.errors import (
    ErrorCategory,
    ProviderError,
    ProviderErrorCode,
    ProviderNotInitializedError,
    ProviderRequestError,
    ResponseFormatError,
    ResponseParseError,
)
from taskpilot.providers.extraction import extract_json_object, require_list_field
from taskpilot.providers.google_provider import GoogleProvider
from taskpilot.providers.registry import (
    PREFERENCE_ORDER,
    PROVIDER_CLASSES,
    ProviderRegistry,
    ProviderType,
)

__all__ = [
    # Contract
    "AIProvider",
    # Implementations
    "AnthropicProvider",
    "GoogleProvider",
    # Registry
    "ProviderRegistry",
    "ProviderType",
    "PROVIDER_CLASSES",
    "PREFERENCE_ORDER",
    # Errors
    "ErrorCategory",
    "ProviderError",
    "ProviderErrorCode",
    "ProviderNotInitializedError",
    "ProviderRequestError",
    "ResponseFormatError",
    "ResponseParseError",
    # Extraction
    "extract_json_object",
    "require_list_field",
]
