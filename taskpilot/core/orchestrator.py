"""Main TaskPilot application context.

This module provides the primary interface for turning PRDs into tasks. A
``TaskPilot`` instance owns the settings, the logging setup and the
provider registry, so cached provider instances live exactly as long as
the application context that created them.
"""

from typing import Any

from loguru import logger

from taskpilot.core.config import Settings, get_settings
from taskpilot.core.logging_setup import configure_logging
from taskpilot.decomposition.models import ComplexityAnalysis, Subtask, Task
from taskpilot.decomposition.task_generator import TaskGenerator
from taskpilot.monitoring.health_check import HealthChecker
from taskpilot.providers.registry import ProviderRegistry, ProviderType


class TaskPilot:
    """
    Main TaskPilot application class.

    Example:
        >>> async with TaskPilot() as pilot:
        ...     tasks = await pilot.parse_prd(prd_text, num_tasks=8)
        ...     subtasks = await pilot.expand_task(tasks[0])
    """

    def __init__(
        self,
        settings: Settings | None = None,
        provider_type: ProviderType | str | None = None,
        overrides: dict[str, dict[str, Any]] | None = None,
        setup_logging: bool = True,
    ) -> None:
        """Initialize the application context.

        Args:
            settings: Optional settings override. Uses default if not provided.
            provider_type: Force a provider type instead of the best available.
            overrides: Per-type provider configuration overrides.
            setup_logging: Configure loguru sinks from settings.
        """
        self.settings = settings or get_settings()

        if setup_logging:
            configure_logging(self.settings)

        self.registry = ProviderRegistry(self.settings)
        self.generator = TaskGenerator(
            self.registry,
            provider_type=provider_type,
            overrides=overrides,
        )

    async def __aenter__(self) -> "TaskPilot":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    # =========================================================================
    # PRIMARY INTERFACE
    # =========================================================================

    async def parse_prd(
        self,
        prd: str,
        num_tasks: int | None = None,
        research: bool = False,
        context: dict[str, Any] | None = None,
    ) -> list[Task]:
        """
        Break a PRD into development tasks.

        Args:
            prd: Product requirements text.
            num_tasks: Number of tasks to request.
            research: Ask for research-backed implementation details.
            context: Additional context for generation.

        Returns:
            Generated tasks.
        """
        logger.info(f"Parsing PRD ({len(prd)} chars)")
        return await self.generator.generate(
            prd,
            num_tasks=num_tasks,
            research=research,
            context=context,
        )

    async def expand_task(
        self,
        task: Task,
        num_subtasks: int | None = None,
        research: bool = False,
        prompt: str = "",
    ) -> list[Subtask]:
        """Expand a task into subtasks."""
        return await self.generator.expand(
            task,
            num_subtasks=num_subtasks,
            research=research,
            prompt=prompt,
        )

    async def analyze_complexity(self, task: Task) -> ComplexityAnalysis:
        """Analyze the complexity of a task."""
        return await self.generator.analyze(task)

    async def health(self) -> dict[str, Any]:
        """Run provider health checks."""
        return await HealthChecker(self.registry, self.settings).check_all()

    def close(self) -> None:
        """Release cached providers."""
        self.registry.clear_instances()
