"""Prompt templates and builders for provider requests."""

from taskpilot.prompts.builder import (
    build_analyze_complexity_prompt,
    build_expand_task_prompt,
    build_generate_tasks_prompt,
)
from taskpilot.prompts.templates import (
    ANALYZE_COMPLEXITY_PROMPT,
    EXPAND_TASK_PROMPT,
    GENERATE_TASKS_PROMPT,
    PromptTemplate,
)

__all__ = [
    "PromptTemplate",
    "GENERATE_TASKS_PROMPT",
    "EXPAND_TASK_PROMPT",
    "ANALYZE_COMPLEXITY_PROMPT",
    "build_generate_tasks_prompt",
    "build_expand_task_prompt",
    "build_analyze_complexity_prompt",
]
