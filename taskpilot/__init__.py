"""
TaskPilot - turn product requirements into structured development tasks.

Delegates task generation, expansion and complexity analysis to LLM
providers (Anthropic, Google) behind a common interface.
"""

__version__ = "0.1.0"
__author__ = "TaskPilot Team"

from taskpilot.core.orchestrator import TaskPilot

__all__ = ["TaskPilot", "__version__"]
