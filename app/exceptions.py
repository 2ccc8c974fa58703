"""Failure types raised by the task repository and the task service.

The HTTP mapping for each of them lives in ``app.exception_handlers``.
"""
from typing import Optional


class TaskError(Exception):
    """Base class for every task domain failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message or f"Task not found with id: {task_id}")
        self.task_id = task_id


class InvalidArgumentError(TaskError, ValueError):
    """Raised for input that breaks a business rule (bad id, missing title...)."""
