"""Bat - orchestrates multiple agents and their tasks."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Tuple

from batAgent.agents.agent import Agent
from batAgent.agents.registry import AgentRegistry
from batAgent.config import Settings, get_settings
from batAgent.tasks.task import RetryConfig, Task, TaskPriority, TaskStatus
from batAgent.utils.logging_utils import TaskLogger

LOGGER = logging.getLogger(__name__)


def failure_message(error: BaseException) -> str:
    return f"Task failed: {str(error) or type(error).__name__}"


class Bat:
    """Owns a task collection, orders it by priority and runs it concurrently.

    Priority decides the order of the result list. With ``max_concurrency`` unset
    every task starts at once; with a limit, a worker pool admits tasks in
    priority order.

    Examples:
        >>> bat = Bat([researcher, writer])
        >>> bat.add_task("Collect sources on topic X", "Research Assistant", priority="high")
        >>> bat.add_task("Draft the summary", "Writer")
        >>> results = await bat.kickoff()
    """

    def __init__(
        self,
        agents: Iterable[Agent],
        logger: Optional[TaskLogger] = None,
        max_concurrency: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            agents: Managed agents (roles must be unique)
            logger: Task logger shared with every task (a new one when omitted)
            max_concurrency: Worker pool size; None uses the configured value
            settings: Settings override (defaults to get_settings())
        """
        self.settings = settings or get_settings()
        self.registry = AgentRegistry(agents)
        self.logger = logger or TaskLogger()
        self.max_concurrency = (
            max_concurrency if max_concurrency is not None else self.settings.governance.max_concurrency
        )
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {self.max_concurrency}")
        self._tasks: List[Task] = []

    @property
    def agents(self) -> List[Agent]:
        return self.registry.list_agents()

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def add_task(
        self,
        description: str,
        agent_role: str,
        priority: Optional[TaskPriority | str] = None,
        timeout_ms: Optional[int] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> Task:
        """Create a task for the agent with ``agent_role`` and queue it.

        Raises:
            AgentNotFound: No managed agent has the role
        """
        agent = self.registry.require(agent_role)
        defaults = self.settings.tasks

        task = Task(
            description,
            agent,
            priority=priority if priority is not None else defaults.priority,
            timeout_ms=timeout_ms if timeout_ms is not None else defaults.timeout_ms,
            retry_config=retry_config or RetryConfig(defaults.max_retries, defaults.retry_delay_ms),
            logger=self.logger,
            available_agents=self.agents,
            settings=self.settings,
        )
        self._tasks.append(task)
        LOGGER.debug(f"Queued task for {agent_role} ({task.priority.value}): {description[:80]}")
        return task

    def clear_tasks(self) -> None:
        self._tasks = []

    def sorted_tasks(self) -> List[Task]:
        """Tasks by descending priority weight; ties keep insertion order."""
        return sorted(self._tasks, key=lambda task: task.priority.weight, reverse=True)

    async def _run_task(self, task: Task) -> str:
        try:
            return await task.run()
        except Exception as exc:
            message = failure_message(exc)
            LOGGER.error(message)
            return message

    async def _run_unbounded(self, ordered: List[Task]) -> List[str]:
        return list(await asyncio.gather(*(self._run_task(task) for task in ordered)))

    async def _run_pooled(self, ordered: List[Task], workers: int) -> List[str]:
        queue: asyncio.PriorityQueue[Tuple[int, int, Task]] = asyncio.PriorityQueue()
        for index, task in enumerate(ordered):
            queue.put_nowait((-task.priority.weight, index, task))

        results: List[str] = [""] * len(ordered)

        async def worker() -> None:
            while True:
                try:
                    _, index, task = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                results[index] = await self._run_task(task)
                queue.task_done()

        await asyncio.gather(*(worker() for _ in range(min(workers, len(ordered)))))
        return results

    async def kickoff(self) -> List[str]:
        """Execute all tasks and return their results in priority order.

        Failed tasks appear as "Task failed: <reason>" strings at their position;
        this method does not raise for task failures.
        """
        ordered = self.sorted_tasks()
        if not ordered:
            return []

        LOGGER.info(
            f"Kickoff: {len(ordered)} tasks, "
            f"concurrency={'unbounded' if self.max_concurrency is None else self.max_concurrency}"
        )

        if self.max_concurrency is None:
            results = await self._run_unbounded(ordered)
        else:
            results = await self._run_pooled(ordered, self.max_concurrency)

        failed = sum(1 for task in ordered if task.status is TaskStatus.FAILED)
        LOGGER.info(f"Kickoff complete: {len(results) - failed} succeeded, {failed} failed")
        return results


__all__ = ["Bat", "failure_message"]
