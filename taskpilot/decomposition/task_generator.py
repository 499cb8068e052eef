"""Task generator - turns PRDs into tasks through an AI provider.

Providers return the tasks the model produced; this layer drops
dependencies that do not point at an earlier task.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from taskpilot.core.config import Settings
from taskpilot.decomposition.models import ComplexityAnalysis, Subtask, Task
from taskpilot.decomposition.validator import find_invalid_dependencies, is_contiguous
from taskpilot.providers.base import AIProvider
from taskpilot.providers.registry import ProviderRegistry, ProviderType


class TaskGenerator:
    """
    Generate, expand and analyze tasks using a registry-managed provider.

    Example:
        >>> generator = TaskGenerator(ProviderRegistry())
        >>> tasks = await generator.generate("Build a REST API with auth", num_tasks=5)
        >>> [t.id for t in tasks]
        [1, 2, 3, 4, 5]
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        provider_type: ProviderType | str | None = None,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        """Initialize the task generator.

        Args:
            registry: Registry used to obtain providers.
            provider_type: Force a provider type instead of the best available.
            overrides: Per-type configuration overrides.
        """
        self.registry = registry
        self.provider_type = provider_type
        self.overrides = overrides

    @property
    def settings(self) -> Settings:
        return self.registry.settings

    async def get_provider(self) -> AIProvider:
        """Get the provider used for requests."""
        if self.provider_type is None:
            return await self.registry.get_best_provider(self.overrides)

        type_name = getattr(self.provider_type, "value", self.provider_type)
        config: dict[str, Any] = dict(self.settings.provider_credentials(type_name))
        if self.overrides and type_name in self.overrides:
            config.update(self.overrides[type_name])
        return await self.registry.get_provider(self.provider_type, config)

    async def generate(
        self,
        prd: str,
        num_tasks: int | None = None,
        research: bool = False,
        context: dict[str, Any] | None = None,
    ) -> list[Task]:
        """
        Generate tasks from a PRD.

        Args:
            prd: Product requirements text.
            num_tasks: Number of tasks; defaults to the configured value.
            research: Ask the provider for research-backed details.
            context: Additional context for generation.

        Returns:
            Tasks with self and forward dependency references removed.
        """
        num_tasks = num_tasks or self.settings.taskpilot_default_num_tasks
        provider = await self.get_provider()

        tasks = await provider.generate_tasks(
            prd,
            num_tasks=num_tasks,
            research=research,
            context=context,
        )

        if not is_contiguous(tasks):
            logger.warning(
                f"Task ids are not contiguous from 1: {[t.id for t in tasks]}"
            )
        if len(tasks) != num_tasks:
            logger.warning(f"Requested {num_tasks} tasks, provider returned {len(tasks)}")

        return self._drop_invalid_dependencies(tasks)

    async def expand(
        self,
        task: Task,
        num_subtasks: int | None = None,
        research: bool = False,
        prompt: str = "",
    ) -> list[Subtask]:
        """Expand a task into subtasks numbered ``<task.id>.1`` .. ``<task.id>.n``."""
        num_subtasks = num_subtasks or self.settings.taskpilot_default_num_subtasks
        provider = await self.get_provider()

        subtasks = await provider.expand_task(
            task,
            num_subtasks=num_subtasks,
            research=research,
            prompt=prompt,
        )

        logger.info(f"Expanded task {task.id} into {len(subtasks)} subtasks")
        return subtasks

    async def analyze(self, task: Task) -> ComplexityAnalysis:
        """Analyze task complexity."""
        provider = await self.get_provider()
        analysis = await provider.analyze_complexity(task)
        logger.info(f"Task {task.id} complexity: {analysis.score}/10")
        return analysis

    @staticmethod
    def _drop_invalid_dependencies(tasks: list[Task]) -> list[Task]:
        invalid = find_invalid_dependencies(tasks)
        if not invalid:
            return tasks

        cleaned: list[Task] = []
        for task in tasks:
            bad = invalid.get(task.id)
            if bad:
                logger.warning(f"Task {task.id}: dropping self/forward dependencies {bad}")
                task = task.model_copy(
                    update={"dependencies": [d for d in task.dependencies if d not in bad]}
                )
            cleaned.append(task)
        return cleaned


async def generate_tasks(prd: str, num_tasks: int | None = None) -> list[Task]:
    """Convenience function to generate tasks with the best available provider.

    Args:
        prd: Product requirements text.
        num_tasks: Number of tasks to request.

    Returns:
        List of Task objects.
    """
    generator = TaskGenerator(ProviderRegistry())
    return await generator.generate(prd, num_tasks=num_tasks)
