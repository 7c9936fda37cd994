"""Task execution lifecycle."""

from .task import (
    DEFAULT_RETRY_CONFIG,
    PRIORITY_WEIGHTS,
    RetryConfig,
    Task,
    TaskPriority,
    TaskStatus,
)

__all__ = [
    "DEFAULT_RETRY_CONFIG",
    "PRIORITY_WEIGHTS",
    "RetryConfig",
    "Task",
    "TaskPriority",
    "TaskStatus",
]
