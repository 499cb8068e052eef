"""Exceptions raised by the provider layer.

Two families live here:

- ``ProviderError`` carries a stable ``ProviderErrorCode`` and is raised by
  the registry when a provider cannot be resolved, configured or reached.
- ``ProviderRequestError`` carries an ``ErrorCategory`` and is raised by a
  provider when a generation call fails. Its message is always the
  human-readable text produced by ``AIProvider.handle_error``.
"""

from enum import Enum


# =============================================================================
# CODES
# =============================================================================


class ProviderErrorCode(str, Enum):
    """Registry-level failure codes."""

    INVALID_PROVIDER = "INVALID_PROVIDER"
    INVALID_CONFIG = "INVALID_CONFIG"
    MODULE_LOAD_ERROR = "MODULE_LOAD_ERROR"
    INIT_ERROR = "INIT_ERROR"
    PROVIDER_UNAVAILABLE = "PROVIDER_UNAVAILABLE"
    NO_PROVIDERS = "NO_PROVIDERS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ErrorCategory(str, Enum):
    """Classification of a failed provider request."""

    OVERLOADED = "overloaded"
    RATE_LIMIT = "rate_limit"
    INVALID_REQUEST = "invalid_request"
    TIMEOUT = "timeout"
    NETWORK = "network"
    API_ERROR = "api_error"
    PARSE = "parse"
    FORMAT = "format"
    UNKNOWN = "unknown"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ProviderError(Exception):
    """Failure to obtain a usable provider."""

    def __init__(self, message: str, code: ProviderErrorCode) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"ProviderError(code={self.code.value!r}, message={self.message!r})"


class ProviderRequestError(Exception):
    """A generation, expansion or analysis request failed."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN) -> None:
        super().__init__(message)
        self.message = message
        self.category = category


class ProviderNotInitializedError(RuntimeError):
    """Provider used before ``initialize`` was called."""

    pass


class ResponseParseError(ValueError):
    """No JSON object region found in a provider response."""

    pass


class ResponseFormatError(ValueError):
    """The JSON region was found but is not the expected shape."""

    pass
