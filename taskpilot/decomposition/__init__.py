"""Task decomposition - models, validation and task generation.

This module provides:
- Data models for tasks, subtasks and complexity analyses
- Task id and dependency validation
- The TaskGenerator service (import from ``taskpilot.decomposition.task_generator``)
"""

from taskpilot.decomposition.models import (
    ComplexityAnalysis,
    ComplexityFactors,
    ProviderConfig,
    Subtask,
    Task,
    TaskPriority,
    TaskStatus,
)
from taskpilot.decomposition.validator import (
    find_invalid_dependencies,
    is_contiguous,
    is_valid_task_id,
)

__all__ = [
    # Models
    "ComplexityAnalysis",
    "ComplexityFactors",
    "ProviderConfig",
    "Subtask",
    "Task",
    "TaskPriority",
    "TaskStatus",
    # Validation
    "find_invalid_dependencies",
    "is_contiguous",
    "is_valid_task_id",
]
