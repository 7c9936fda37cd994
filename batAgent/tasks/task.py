"""Task - one unit of work bound to an agent, with timeout and retry control."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from batAgent.errors import RetryExhausted, TimeoutExceeded
from batAgent.utils.logging_utils import TaskLogger

if TYPE_CHECKING:
    from batAgent.agents.agent import Agent
    from batAgent.config import Settings

LOGGER = logging.getLogger(__name__)


class TaskPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def weight(self) -> int:
        return PRIORITY_WEIGHTS[self]


PRIORITY_WEIGHTS = {
    TaskPriority.HIGH: 3,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 1,
}


class TaskStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    RETRYING = "retrying"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """Retry behaviour of a task.

    Attributes:
        max_retries: Total number of attempts (1 = no retry)
        retry_delay_ms: Fixed delay between attempts
    """

    max_retries: int = 3
    retry_delay_ms: int = 1000

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.retry_delay_ms < 0:
            raise ValueError(f"retry_delay_ms must be >= 0, got {self.retry_delay_ms}")


DEFAULT_RETRY_CONFIG = RetryConfig()


class Task:
    """A task executed by one agent.

    Every attempt is bounded by ``timeout_ms``; a timed-out attempt is
    cancelled, not left running. Failed attempts are retried after a fixed
    ``retry_delay_ms`` until ``max_retries`` attempts have been made.

    Examples:
        >>> task = Task("Summarize the report", agent, priority="high", timeout_ms=10_000)
        >>> result = await task.run()
    """

    def __init__(
        self,
        description: str,
        agent: "Agent",
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        timeout_ms: int = 30000,
        retry_config: Optional[RetryConfig] = None,
        logger: Optional[TaskLogger] = None,
        available_agents: Sequence["Agent"] = (),
        settings: Optional["Settings"] = None,
    ):
        if timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {timeout_ms}")
        self.description = description
        self.agent = agent
        self.priority = TaskPriority(priority)
        self.timeout_ms = timeout_ms
        self.retry_config = retry_config or DEFAULT_RETRY_CONFIG
        self.available_agents = tuple(available_agents)
        self.settings = settings
        self.logger = logger or TaskLogger()

        self.attempt_count = 0
        self.status = TaskStatus.PENDING
        self.last_error: Optional[BaseException] = None

    def get_priority(self) -> TaskPriority:
        return self.priority

    async def _attempt(self) -> str:
        # Settings are forwarded only when injected by an orchestrator
        options = {"settings": self.settings} if self.settings is not None else {}
        try:
            return await asyncio.wait_for(
                self.agent.execute(self.description, self.available_agents, **options),
                timeout=self.timeout_ms / 1000,
            )
        except asyncio.TimeoutError as exc:
            raise TimeoutExceeded(self.timeout_ms) from exc

    async def run(self) -> str:
        """Execute the task with retry logic and timeout control.

        Raises:
            RetryExhausted: Every attempt failed; carries the last error and attempt count
        """
        self.attempt_count = 0
        self.last_error = None
        self.status = TaskStatus.RUNNING
        max_retries = self.retry_config.max_retries
        self.logger.log_task_execution(self.description, "started")

        while True:
            self.logger.log_agent_action(
                self.agent.role,
                f"attempt {self.attempt_count + 1}/{max_retries}: {self.description}",
            )
            try:
                result = await self._attempt()
            except Exception as exc:
                self.attempt_count += 1
                self.last_error = exc

                if self.attempt_count >= max_retries:
                    self.status = TaskStatus.FAILED
                    error = RetryExhausted(exc, self.attempt_count)
                    self.logger.log_task_execution(self.description, "failed", str(error))
                    raise error from exc

                self.status = TaskStatus.RETRYING
                self.logger.log_task_execution(
                    self.description,
                    "retrying",
                    f"Attempt {self.attempt_count}/{max_retries}: {exc}",
                )
                await asyncio.sleep(self.retry_config.retry_delay_ms / 1000)
                self.status = TaskStatus.RUNNING
                continue

            self.status = TaskStatus.COMPLETED
            self.logger.log_task_execution(self.description, "completed", result)
            return result

    def __repr__(self) -> str:
        return (
            f"Task(description={self.description[:40]!r}, agent={self.agent.role!r}, "
            f"priority={self.priority.value}, status={self.status.value})"
        )


__all__ = [
    "TaskPriority",
    "TaskStatus",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "PRIORITY_WEIGHTS",
    "Task",
]
