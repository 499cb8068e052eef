"""Validation helpers for task identifiers and generated task lists."""

import re
from collections.abc import Iterable
from typing import Any

from taskpilot.decomposition.models import Task

TASK_ID_PATTERN = re.compile(r"TASK-(0|[1-9][0-9]*)")
TASK_ID_MIN_LENGTH = 6
TASK_ID_MAX_LENGTH = 12


def is_valid_task_id(value: Any) -> bool:
    """Check whether a value is a well-formed task id.

    A valid id is the literal prefix ``TASK-`` followed by a number without
    leading zeros (``0`` itself is allowed), 6 to 12 characters in total.

    Args:
        value: Candidate id of any type.

    Returns:
        True if the id is valid. Never raises.

    Example:
        >>> is_valid_task_id("TASK-1")
        True
        >>> is_valid_task_id("TASK-01")
        False
    """
    if not isinstance(value, str):
        return False
    if not TASK_ID_MIN_LENGTH <= len(value) <= TASK_ID_MAX_LENGTH:
        return False
    return TASK_ID_PATTERN.fullmatch(value) is not None


def find_invalid_dependencies(tasks: Iterable[Task]) -> dict[int, list[int]]:
    """Find self and forward dependency references.

    Args:
        tasks: Tasks to check.

    Returns:
        Mapping of task id to the offending dependency ids. Tasks without
        problems are omitted.
    """
    invalid: dict[int, list[int]] = {}
    for task in tasks:
        bad = [dep for dep in task.dependencies if dep >= task.id]
        if bad:
            invalid[task.id] = bad
    return invalid


def is_contiguous(tasks: Iterable[Task]) -> bool:
    """Check that task ids run 1..n in order."""
    ids = [task.id for task in tasks]
    return ids == list(range(1, len(ids) + 1))
