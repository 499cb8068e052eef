"""Pydantic models for task decomposition.

This module defines the data structures exchanged with AI providers:
provider configuration, tasks, subtasks and complexity analyses. Field
aliases keep the JSON shape providers are asked to produce
(``testStrategy``, ``apiKey``) while Python code uses snake_case.
"""

import copy
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class TaskStatus(str, Enum):
    """Lifecycle status of a task or subtask."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    DEFERRED = "deferred"


class TaskPriority(str, Enum):
    """Task priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# =============================================================================
# PROVIDER CONFIGURATION
# =============================================================================


class ProviderConfig(BaseModel):
    """Configuration handed to ``AIProvider.initialize``.

    The API key is optional at the model level so that a missing key can be
    reported by the registry as ``INVALID_CONFIG`` rather than as a
    validation error.

    Example:
        >>> config = ProviderConfig(api_key="sk-ant-...", model="claude-3-7-sonnet-20250219")
        >>> dict(config.options)
        {}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api_key: str | None = Field(
        default=None,
        alias="apiKey",
        description="Vendor API key",
    )
    model: str | None = Field(
        default=None,
        description="Model name; providers fall back to their own default",
    )
    options: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Provider-specific options (max_tokens, temperature, ...)",
    )

    @field_validator("options")
    @classmethod
    def freeze_options(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        """Store a read-only copy of the options."""
        return MappingProxyType(copy.deepcopy(dict(v)))


# =============================================================================
# TASKS
# =============================================================================


class Task(BaseModel):
    """A top-level development task generated from a PRD.

    Example:
        >>> task = Task(id=2, title="Create User model", description="...", dependencies=[1])
        >>> task.model_dump(by_alias=True)["testStrategy"]
        ''
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., ge=1, description="Sequential task id starting at 1")
    title: str = Field(..., min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    dependencies: list[int] = Field(
        default_factory=list,
        description="Ids of tasks this task depends on (all lower than id)",
    )
    priority: TaskPriority = TaskPriority.MEDIUM
    details: str = Field(default="", description="Implementation details")
    test_strategy: str = Field(
        default="",
        alias="testStrategy",
        description="Validation approach",
    )

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> Any:
        """Accept priorities in any letter case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def has_invalid_dependencies(self) -> bool:
        """Check for self or forward dependency references."""
        return any(dep >= self.id for dep in self.dependencies)

    def to_prompt_dict(self) -> dict[str, Any]:
        """Serialise the task in the JSON shape shown to providers."""
        return self.model_dump(mode="json", by_alias=True)


class Subtask(BaseModel):
    """A subtask produced by expanding a task."""

    id: str = Field(..., description='Formatted "<parentId>.<n>"')
    title: str = Field(..., min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    details: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept numeric ids; ``AIProvider.expand_task`` replaces them."""
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @property
    def parent_id(self) -> str:
        """Parent portion of the dotted id."""
        return self.id.rsplit(".", 1)[0]


# =============================================================================
# COMPLEXITY
# =============================================================================


class ComplexityFactors(BaseModel):
    """Factors contributing to a complexity score."""

    scope: str = ""
    technical: str = ""
    dependencies: str = ""
    risks: str = ""


class ComplexityAnalysis(BaseModel):
    """Complexity analysis of a single task."""

    score: int = Field(..., ge=1, le=10, description="Complexity score (1-10)")
    explanation: str = ""
    factors: ComplexityFactors = Field(default_factory=ComplexityFactors)

    @property
    def is_complex(self) -> bool:
        """Whether the task should be broken down further."""
        return self.score >= 7
