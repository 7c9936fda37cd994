"""Utility helpers."""

from .logging_utils import (
    TaskLogger,
    log_delegation,
    log_error,
    log_prompt,
    log_tool_call,
    log_tool_result,
    setup_logging,
)

__all__ = [
    "TaskLogger",
    "log_delegation",
    "log_error",
    "log_prompt",
    "log_tool_call",
    "log_tool_result",
    "setup_logging",
]
