#!/usr/bin/env python3
"""batAgent CLI Entrypoint

Runs a crew of agents over a task list and prints the results in priority order.

Usage:
    # Run the tasks declared in the default crew file
    python main.py

    # Use another crew file
    python main.py --config my_crew.yaml

    # One-off task for an agent of the crew (ignores the file's task list)
    python main.py --task "What is 2 ** 10?" --agent Analyst --priority high

    # Admit at most two tasks at a time, highest priority first
    python main.py --max-concurrency 2
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List

from batAgent.agents.scanner import load_agents_from_config, load_tasks_from_config
from batAgent.config import get_settings, resolve_project_path
from batAgent.errors import BatError
from batAgent.orchestration import Bat
from batAgent.runtime import build_oracle
from batAgent.tasks import RetryConfig
from batAgent.utils import TaskLogger, log_error, setup_logging


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="batAgent - run tasks across delegating agents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=str,
        default="batAgent/config/crew.yaml",
        help="Crew YAML file with agents and tasks (default: batAgent/config/crew.yaml)",
    )
    parser.add_argument("--task", type=str, help="Run a single task instead of the file's task list")
    parser.add_argument("--agent", type=str, help="Agent role for --task")
    parser.add_argument(
        "--priority",
        type=str,
        choices=["high", "medium", "low"],
        help="Priority for --task",
    )
    parser.add_argument(
        "--max-concurrency",
        type=int,
        help="Worker pool size (default: unbounded)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    return parser.parse_args(argv)


def add_tasks(bat: Bat, args: argparse.Namespace, config_path) -> None:
    if args.task:
        if not args.agent:
            raise SystemExit("--task requires --agent")
        bat.add_task(args.task, args.agent, priority=args.priority)
        return

    for spec in load_tasks_from_config(config_path):
        retry = None
        if spec.max_retries is not None or spec.retry_delay_ms is not None:
            defaults = bat.settings.tasks
            retry = RetryConfig(
                max_retries=spec.max_retries if spec.max_retries is not None else defaults.max_retries,
                retry_delay_ms=spec.retry_delay_ms if spec.retry_delay_ms is not None else defaults.retry_delay_ms,
            )
        bat.add_task(
            spec.description,
            spec.agent,
            priority=spec.priority,
            timeout_ms=spec.timeout_ms,
            retry_config=retry,
        )


async def async_main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    level = logging.DEBUG if args.verbose else getattr(logging, settings.observability.log_level.upper(), logging.INFO)
    logger = setup_logging(level=level, log_dir=resolve_project_path(settings.observability.log_dir))

    try:
        config_path = resolve_project_path(args.config)
        oracle = build_oracle(settings)
        agents = load_agents_from_config(config_path, oracle)

        bat = Bat(agents, logger=TaskLogger(logger.getChild("tasks")), max_concurrency=args.max_concurrency)
        add_tasks(bat, args, config_path)

        ordered = bat.sorted_tasks()
        results = await bat.kickoff()
    except (BatError, FileNotFoundError, KeyError, RuntimeError, ValueError) as e:
        print(f"\n❌ Startup failed: {e}")
        log_error(logger, e, context="async_main() initialization")
        return 1

    for task, result in zip(ordered, results):
        print(f"\n[{task.priority.value}] {task.agent.role}: {task.description}")
        print(result)
    return 0


def main() -> None:
    """Entry point that runs the async main function."""
    sys.exit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
