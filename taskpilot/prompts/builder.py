"""
Prompt builder for provider requests.

Each builder returns a ``(system_prompt, user_message)`` pair ready to be
sent to a provider.
"""

import json
from typing import Any

from taskpilot.decomposition.models import Task
from taskpilot.prompts.templates import (
    ANALYZE_COMPLEXITY_PROMPT,
    EXPAND_TASK_PROMPT,
    GENERATE_TASKS_PROMPT,
    RESEARCH_GUIDELINE,
)


def build_generate_tasks_prompt(
    prd: str,
    num_tasks: int,
    research: bool = False,
    context: dict[str, Any] | None = None,
) -> tuple[str, str]:
    """Build the prompts for PRD task generation.

    Args:
        prd: Product requirements text.
        num_tasks: Desired number of tasks.
        research: Ask the provider to lean on current best practices.
        context: Extra context appended to the user message as JSON.

    Returns:
        Tuple of (system prompt, user message).
    """
    system_prompt = GENERATE_TASKS_PROMPT.render(
        num_tasks=num_tasks,
        research_guideline=RESEARCH_GUIDELINE if research else "",
    )

    user_message = prd
    if context:
        user_message += f"\n\nAdditional context:\n{json.dumps(context, indent=2, default=str)}"

    return system_prompt, user_message


def build_expand_task_prompt(
    task: Task,
    num_subtasks: int,
    research: bool = False,
    prompt: str = "",
) -> tuple[str, str]:
    """Build the prompts for expanding a task into subtasks.

    Args:
        task: Task to expand.
        num_subtasks: Desired number of subtasks.
        research: Ask the provider to lean on current best practices.
        prompt: Additional free-form context from the caller.

    Returns:
        Tuple of (system prompt, user message).
    """
    system_prompt = EXPAND_TASK_PROMPT.render(
        num_subtasks=num_subtasks,
        task_id=task.id,
        research_guideline=RESEARCH_GUIDELINE if research else "",
    )

    user_message = f"Task to expand:\n{json.dumps(task.to_prompt_dict(), indent=2)}\n"
    if prompt:
        user_message += f"\n\nAdditional context:\n{prompt}"

    return system_prompt, user_message


def build_analyze_complexity_prompt(task: Task) -> tuple[str, str]:
    """Build the prompts for complexity analysis."""
    user_message = f"Task to analyze:\n{json.dumps(task.to_prompt_dict(), indent=2)}"
    return ANALYZE_COMPLEXITY_PROMPT.render(), user_message
