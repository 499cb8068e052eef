"""Abstract base class for AI providers.

A provider turns the three TaskPilot operations (task generation, task
expansion, complexity analysis) into requests against one vendor API.
Subclasses supply the vendor client, the raw completion call and the
vendor-specific error classification; prompt building, JSON extraction,
model validation and error rewrapping are shared here.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from loguru import logger
from pydantic import ValidationError

from taskpilot.decomposition.models import (
    ComplexityAnalysis,
    ProviderConfig,
    Subtask,
    Task,
)
from taskpilot.prompts.builder import (
    build_analyze_complexity_prompt,
    build_expand_task_prompt,
    build_generate_tasks_prompt,
)
from taskpilot.providers.errors import (
    ErrorCategory,
    ProviderNotInitializedError,
    ProviderRequestError,
    ResponseFormatError,
    ResponseParseError,
)
from taskpilot.providers.extraction import extract_json_object, require_list_field

DEFAULT_GENERATION_MAX_TOKENS = 4000
DEFAULT_ANALYSIS_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7


class AIProvider(ABC):
    """
    Common contract for all provider implementations.

    Subclasses implement ``_create_client``, ``_complete`` and
    ``_classify_vendor_error``; everything else is shared.

    Example:
        >>> provider = AnthropicProvider()
        >>> await provider.initialize(ProviderConfig(api_key="sk-ant-..."))
        >>> tasks = await provider.generate_tasks(prd_text, num_tasks=5)
    """

    provider_type: ClassVar[str] = "base"
    display_name: ClassVar[str] = "AI provider"
    default_model: ClassVar[str] = ""

    def __init__(self) -> None:
        self._config: ProviderConfig | None = None
        self._client: Any = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def initialize(self, config: ProviderConfig) -> None:
        """Store the configuration and build the vendor client.

        Calling this again replaces the configuration and client.

        Args:
            config: Provider configuration.
        """
        self._config = config
        self._client = self._create_client(config)
        logger.debug(f"Initialized {self.provider_type} provider with model {self.model}")

    @property
    def is_initialized(self) -> bool:
        """Whether ``initialize`` has completed."""
        return self._config is not None and self._client is not None

    @property
    def model(self) -> str:
        """Model used for requests."""
        if self._config is not None and self._config.model:
            return self._config.model
        return self.default_model

    def _option(self, name: str, default: Any) -> Any:
        if self._config is None:
            return default
        return self._config.options.get(name, default)

    def _require_client(self) -> Any:
        if not self.is_initialized:
            raise ProviderNotInitializedError(
                f"{self.provider_type} provider used before initialize()"
            )
        return self._client

    # =========================================================================
    # VENDOR HOOKS
    # =========================================================================

    @abstractmethod
    def _create_client(self, config: ProviderConfig) -> Any:
        """Construct the vendor SDK client."""

    @abstractmethod
    async def _complete(
        self,
        system_prompt: str | None,
        user_message: str,
        max_tokens: int,
    ) -> str:
        """Send one completion request and return the reply text."""

    @abstractmethod
    def _classify_vendor_error(self, error: BaseException) -> ErrorCategory | None:
        """Map a vendor exception to an ErrorCategory; None when not a vendor error."""

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def generate_tasks(
        self,
        prd: str,
        *,
        num_tasks: int = 10,
        research: bool = False,
        context: dict[str, Any] | None = None,
    ) -> list[Task]:
        """Generate development tasks from a PRD.

        Args:
            prd: Product requirements text.
            num_tasks: Target number of tasks.
            research: Ask for current best practices in the details.
            context: Additional context for generation.

        Returns:
            Tasks as returned by the provider.

        Raises:
            ProviderRequestError: Request, parsing or validation failed.
        """
        self._require_client()
        system_prompt, user_message = build_generate_tasks_prompt(
            prd, num_tasks, research=research, context=context
        )
        logger.info(f"Generating {num_tasks} tasks with {self.provider_type} ({self.model})")

        try:
            text = await self._complete(
                system_prompt,
                user_message,
                max_tokens=self._option("max_tokens", DEFAULT_GENERATION_MAX_TOKENS),
            )
            items = require_list_field(extract_json_object(text), "tasks")
            tasks = self._validate_items(Task, items)
        except Exception as e:
            raise self._rewrap(e) from e

        logger.info(f"{self.provider_type} returned {len(tasks)} tasks")
        return tasks

    async def expand_task(
        self,
        task: Task,
        *,
        num_subtasks: int = 3,
        research: bool = False,
        prompt: str = "",
    ) -> list[Subtask]:
        """Expand a task into subtasks.

        Args:
            task: The task to expand.
            num_subtasks: Target number of subtasks.
            research: Ask for current best practices in the details.
            prompt: Additional context for expansion.

        Returns:
            Subtasks with ids renumbered to ``<task.id>.1`` .. ``<task.id>.n``.

        Raises:
            ProviderRequestError: Request, parsing or validation failed.
        """
        self._require_client()
        system_prompt, user_message = build_expand_task_prompt(
            task, num_subtasks, research=research, prompt=prompt
        )
        logger.info(f"Expanding task {task.id} into {num_subtasks} subtasks")

        try:
            text = await self._complete(
                system_prompt,
                user_message,
                max_tokens=self._option("max_tokens", DEFAULT_GENERATION_MAX_TOKENS),
            )
            items = require_list_field(extract_json_object(text), "subtasks")
            subtasks = self._validate_items(Subtask, items)
        except Exception as e:
            raise self._rewrap(e) from e

        return [
            subtask.model_copy(update={"id": f"{task.id}.{n}"})
            for n, subtask in enumerate(subtasks, start=1)
        ]

    async def analyze_complexity(self, task: Task) -> ComplexityAnalysis:
        """Analyze the complexity of a task.

        Raises:
            ProviderRequestError: Request, parsing or validation failed.
        """
        self._require_client()
        system_prompt, user_message = build_analyze_complexity_prompt(task)
        logger.info(f"Analyzing complexity of task {task.id}")

        try:
            text = await self._complete(
                system_prompt,
                user_message,
                max_tokens=self._option("analysis_max_tokens", DEFAULT_ANALYSIS_MAX_TOKENS),
            )
            payload = extract_json_object(text)
            try:
                return ComplexityAnalysis.model_validate(payload)
            except ValidationError as e:
                raise ResponseFormatError(f"Invalid response format: {e.error_count()} errors") from e
        except Exception as e:
            raise self._rewrap(e) from e

    async def is_available(self) -> bool:
        """Check that the provider is configured and reachable.

        Sends a minimal one-token request. Never raises.
        """
        if self._config is None or not self._config.api_key:
            return False

        try:
            await self._complete(None, "test", max_tokens=1)
            return True
        except Exception as e:
            logger.debug(f"{self.provider_type} availability probe failed: {e}")
            return False

    # =========================================================================
    # ERROR HANDLING
    # =========================================================================

    def handle_error(self, error: BaseException) -> str:
        """Turn an exception into a user-friendly message.

        Args:
            error: The exception raised while talking to the provider.

        Returns:
            Human-readable error message.
        """
        name = self.display_name
        category = self.classify_error(error)

        if category is ErrorCategory.OVERLOADED:
            return (
                f"{name} is currently experiencing high demand and is overloaded. "
                "Please wait a few minutes and try again."
            )
        if category is ErrorCategory.RATE_LIMIT:
            return (
                "You have exceeded the rate limit. "
                "Please wait a few minutes before making more requests."
            )
        if category is ErrorCategory.INVALID_REQUEST:
            return (
                "There was an issue with the request format. "
                "If this persists, please report it as a bug."
            )
        if category is ErrorCategory.TIMEOUT:
            return f"The request to {name} timed out. Please try again."
        if category is ErrorCategory.NETWORK:
            return (
                f"There was a network error connecting to {name}. "
                "Please check your internet connection and try again."
            )
        if category is ErrorCategory.API_ERROR:
            return f"{name} API error: {self._error_detail(error)}"

        return f"Error communicating with {name}: {error}"

    def _error_detail(self, error: BaseException) -> str:
        """Vendor message carried by an API error."""
        return str(error)

    def classify_error(self, error: BaseException) -> ErrorCategory:
        """Classify an exception raised during a provider request.

        Extraction failures are recognised first, then vendor SDK errors,
        then timeout or network wording in the message.
        """
        if isinstance(error, ResponseParseError):
            return ErrorCategory.PARSE
        if isinstance(error, ResponseFormatError):
            return ErrorCategory.FORMAT

        category = self._classify_vendor_error(error)
        if category is not None:
            return category

        message = str(error).lower()
        if "timeout" in message or "timed out" in message:
            return ErrorCategory.TIMEOUT
        if "network" in message:
            return ErrorCategory.NETWORK
        return ErrorCategory.UNKNOWN

    def _rewrap(self, error: Exception) -> ProviderRequestError:
        message = self.handle_error(error)
        logger.error(f"{self.provider_type} request failed: {message}")
        return ProviderRequestError(message, self.classify_error(error))

    def _validate_items(self, model: type, items: list[Any]) -> list[Any]:
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            raise ResponseFormatError(f"Invalid response format: {e.error_count()} errors") from e

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r}, initialized={self.is_initialized})"
