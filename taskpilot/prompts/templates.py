"""
Prompt templates for TaskPilot operations.

This module provides the system prompts sent to providers for task
generation, task expansion and complexity analysis. Literal JSON braces are
doubled because templates are rendered with ``str.format``.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# TEMPLATE MODEL
# =============================================================================


class PromptTemplate(BaseModel):
    """A reusable prompt template."""

    model_config = ConfigDict(frozen=True)

    name: str
    template: str
    description: str = ""
    variables: list[str] = Field(default_factory=list)

    def render(self, **values: Any) -> str:
        """Render the template.

        Args:
            **values: Values for every declared variable.

        Returns:
            The rendered prompt.

        Raises:
            ValueError: If a declared variable has no value.
        """
        missing = self.missing_variables(values)
        if missing:
            raise ValueError(f"Prompt '{self.name}' is missing variables: {', '.join(missing)}")
        return self.template.format(**values)

    def missing_variables(self, values: Mapping[str, Any]) -> list[str]:
        return [v for v in self.variables if v not in values]


# =============================================================================
# TASK GENERATION
# =============================================================================


GENERATE_TASKS_PROMPT = PromptTemplate(
    name="generate_tasks",
    description="System prompt for breaking a PRD into development tasks",
    template="""You are an AI assistant helping to break down a Product Requirements Document (PRD) into a set of sequential development tasks.
Your goal is to create {num_tasks} well-structured, actionable development tasks based on the PRD provided.

Each task should follow this JSON structure:
{{
  "id": number,
  "title": string,
  "description": string,
  "status": "pending",
  "dependencies": number[] (IDs of tasks this depends on),
  "priority": "high" | "medium" | "low",
  "details": string (implementation details),
  "testStrategy": string (validation approach)
}}

Guidelines:
1. Create exactly {num_tasks} tasks, numbered from 1 to {num_tasks}
2. Each task should be atomic and focused on a single responsibility
3. Order tasks logically - consider dependencies and implementation sequence
4. Early tasks should focus on setup, core functionality first, then advanced features
5. Include clear validation/testing approach for each task
6. Set appropriate dependency IDs (a task can only depend on tasks with lower IDs)
7. Assign priority (high/medium/low) based on criticality and dependency order
8. Include detailed implementation guidance in the "details" field
9. If the PRD contains specific requirements for libraries, database schemas, frameworks, tech stacks, or any other implementation details, STRICTLY ADHERE to these requirements
10. Focus on filling in any gaps left by the PRD while preserving all explicit requirements
11. Always aim to provide the most direct path to implementation{research_guideline}

Expected output format:
{{
  "tasks": [
    {{
      "id": 1,
      "title": "Setup Project Repository",
      ...
    }},
    ...
  ]
}}""",
    variables=["num_tasks", "research_guideline"],
)


# =============================================================================
# TASK EXPANSION
# =============================================================================


EXPAND_TASK_PROMPT = PromptTemplate(
    name="expand_task",
    description="System prompt for splitting a task into subtasks",
    template="""You are an AI assistant helping to break down a development task into smaller subtasks.
Your goal is to create {num_subtasks} well-structured, actionable subtasks for the given task.

Each subtask should follow this JSON structure:
{{
  "id": string,          // Format: "parentId.subtaskNumber" (e.g., "1.1")
  "title": string,       // Brief, descriptive title
  "description": string, // What needs to be done
  "status": "pending",   // Always "pending" for new subtasks
  "details": string      // Implementation guidance
}}

Guidelines:
1. Create exactly {num_subtasks} subtasks
2. Each subtask should be atomic and focused
3. Order subtasks logically in sequence
4. Include clear implementation guidance
5. Consider any additional context provided{research_guideline}

Expected output format:
{{
  "subtasks": [
    {{
      "id": "{task_id}.1",
      "title": "First Subtask",
      ...
    }},
    ...
  ]
}}""",
    variables=["num_subtasks", "task_id", "research_guideline"],
)


# =============================================================================
# COMPLEXITY ANALYSIS
# =============================================================================


ANALYZE_COMPLEXITY_PROMPT = PromptTemplate(
    name="analyze_complexity",
    description="System prompt for scoring task complexity",
    template="""You are an AI assistant analyzing the complexity of a development task.
Your goal is to provide a detailed complexity analysis with a score from 1-10 and explanation.

Expected output format:
{{
  "score": number,        // 1-10 complexity score
  "explanation": string,  // Detailed explanation of the score
  "factors": {{           // Factors contributing to complexity
    "scope": string,     // Breadth of changes needed
    "technical": string, // Technical challenges
    "dependencies": string, // External dependencies
    "risks": string      // Potential risks
  }}
}}""",
    variables=[],
)


RESEARCH_GUIDELINE = (
    "\n\nResearch: draw on current, widely adopted best practices and libraries for "
    "the technologies involved, and name them in the details."
)
