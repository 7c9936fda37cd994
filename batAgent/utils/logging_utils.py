"""Logging utilities for batAgent."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

ROOT_LOGGER_NAME = "batAgent"


def setup_logging(level: int = logging.INFO, log_dir: str | Path = "logs") -> logging.Logger:
    """Setup logging configuration for batAgent.

    Args:
        level: Console/file logging level (default: INFO)
        log_dir: Directory for the session log file

    Returns:
        Configured logger instance
    """
    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"batagent_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Child loggers decide; handlers filter
    logger.propagate = False

    logger.handlers = []

    # File handler (detailed logs)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    # Console handler (user-friendly)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.WARNING))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.info("=" * 80)
    logger.info("batAgent session started")
    logger.info(f"Log file: {log_file}")
    logger.info("=" * 80)

    return logger


class TaskLogger:
    """Records task and agent activity and forwards it to stdlib logging.

    One instance is passed explicitly to the orchestrator and to every task it
    creates, so tests can inspect the records of a single run.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(f"{ROOT_LOGGER_NAME}.tasks")
        self._logs: List[str] = []

    def log_agent_action(self, agent_role: str, action: str) -> None:
        timestamp = datetime.now(timezone.utc).isoformat()
        line = f"[{timestamp}] AGENT [{agent_role}]: {action}"
        self._logs.append(line)
        self._logger.info(line)

    def log_task_execution(self, task_description: str, status: str, detail: Optional[str] = None) -> None:
        """Log a task lifecycle event.

        Args:
            task_description: Description of the task
            status: started | retrying | completed | failed
            detail: Optional result, retry reason or error message
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        line = f"[{timestamp}] TASK [{status.upper()}]: {task_description}"
        if detail:
            line += f"\nResult: {detail}"
        self._logs.append(line)

        if status == "failed":
            self._logger.error(line)
        elif status == "retrying":
            self._logger.warning(line)
        else:
            self._logger.info(line)

    def get_logs(self) -> List[str]:
        return list(self._logs)

    def clear_logs(self) -> None:
        self._logs = []


def truncate(text: str, max_length: int = 500) -> str:
    if len(text) > max_length:
        return text[:max_length] + "... (truncated)"
    return text


def log_tool_call(logger: logging.Logger, tool_name: str, args: Dict[str, Any]) -> None:
    """Log tool invocation.

    Args:
        logger: Logger instance
        tool_name: Name of the tool being called
        args: Tool arguments
    """
    logger.info(f"Tool call: {tool_name}")
    logger.debug(f"  Arguments: {json.dumps(args, ensure_ascii=False, indent=2, default=str)}")


def log_tool_result(logger: logging.Logger, tool_name: str, result: Any, success: bool = True) -> None:
    """Log tool execution result.

    Args:
        logger: Logger instance
        tool_name: Name of the tool
        result: Tool execution result (or error)
        success: Whether the tool executed successfully
    """
    status = "✓ Success" if success else "✗ Failed"
    logger.info(f"Tool result: {tool_name} - {status}")
    logger.debug(f"  Result: {truncate(str(result))}")


def log_prompt(logger: logging.Logger, phase: str, prompt: str, max_length: int = 500) -> None:
    """Log the prompt sent to the oracle for a resolver phase."""
    logger.debug(f"Prompt for {phase}:\n{truncate(prompt.strip(), max_length)}")


def log_delegation(logger: logging.Logger, from_role: str, to_role: str, reason: str = "") -> None:
    """Log a delegation hand-off.

    Args:
        logger: Logger instance
        from_role: Delegating agent role
        to_role: Target agent role
        reason: Reason reported by the oracle
    """
    logger.info(f"Delegation: {from_role} → {to_role}")
    if reason:
        logger.info(f"  → Reason: {reason}")


def log_error(logger: logging.Logger, error: BaseException, context: str = "") -> None:
    """Log error with context.

    Args:
        logger: Logger instance
        error: Exception instance
        context: Additional context about where the error occurred
    """
    logger.error(f"Error occurred: {type(error).__name__}: {str(error)}")
    if context:
        logger.error(f"  Context: {context}")
    logger.debug("Full traceback:", exc_info=error)


__all__ = [
    "ROOT_LOGGER_NAME",
    "setup_logging",
    "TaskLogger",
    "truncate",
    "log_tool_call",
    "log_tool_result",
    "log_prompt",
    "log_delegation",
    "log_error",
]
