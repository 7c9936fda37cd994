"""Crew scanner - builds agents and task lists from a crew YAML file.

File layout:

    agents:
      Research Assistant:
        goal: Gather and analyze information
        backstory: ...
        capabilities: [web_search]
        tools: [now]
        memory: {type: buffer-window, k: 3}
    tasks:
      - description: Summarize the news
        agent: Research Assistant
        priority: high
        timeout_ms: 60000
        retry: {max_retries: 2, retry_delay_ms: 500}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from batAgent.memory import MemoryFactory
from batAgent.tools.registry import ToolRegistry, build_default_tool_registry

from .agent import Agent
from .schema import AgentSpec, TaskSpec

LOGGER = logging.getLogger(__name__)


def load_crew_config(config_path: Path | str) -> Dict[str, Any]:
    """Load a crew YAML file.

    Raises:
        FileNotFoundError: Config file does not exist
        yaml.YAMLError: YAML parse error
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Crew config not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Crew config must be a mapping: {config_path}")

    LOGGER.debug(f"Loaded crew config from {config_path}")
    return config


def parse_agent_spec(role: str, config: Dict[str, Any]) -> AgentSpec:
    """Parse one agent entry.

    Raises:
        KeyError: Missing required 'goal'
    """
    return AgentSpec(
        role=role,
        goal=config["goal"],
        backstory=config.get("backstory", ""),
        capabilities=list(config.get("capabilities", [])),
        tools=list(config.get("tools", [])),
        memory=config.get("memory"),
    )


def parse_task_spec(config: Dict[str, Any]) -> TaskSpec:
    """Parse one task entry.

    Raises:
        KeyError: Missing 'description' or 'agent'
    """
    retry = config.get("retry") or {}
    return TaskSpec(
        description=config["description"],
        agent=config["agent"],
        priority=config.get("priority"),
        timeout_ms=config.get("timeout_ms"),
        max_retries=retry.get("max_retries"),
        retry_delay_ms=retry.get("retry_delay_ms"),
    )


def build_agent(spec: AgentSpec, model: Any, tool_registry: ToolRegistry) -> Agent:
    """Instantiate an Agent from its spec; the model is shared by all agents."""
    memory = None
    if spec.memory:
        options = dict(spec.memory)
        memory_type = options.pop("type", "buffer")
        options.setdefault("llm", model)
        memory = MemoryFactory.create_memory(memory_type, **options)

    return Agent(
        role=spec.role,
        goal=spec.goal,
        backstory=spec.backstory,
        model=model,
        memory=memory,
        tools=tool_registry.allowed_tools(spec.tools),
        capabilities=spec.capabilities,
    )


def load_agents_from_config(
    config_path: Path | str,
    model: Any,
    tool_registry: Optional[ToolRegistry] = None,
) -> List[Agent]:
    """Build every agent declared in a crew file.

    Raises:
        KeyError: Unknown tool name or missing required field
        MemoryConfigError: Invalid memory configuration
    """
    config = load_crew_config(config_path)
    registry = tool_registry or build_default_tool_registry()

    agents = []
    for role, agent_config in (config.get("agents") or {}).items():
        spec = parse_agent_spec(role, agent_config or {})
        agents.append(build_agent(spec, model, registry))
        LOGGER.info(f"Registered agent: {role} (tools: {spec.tools or '-'})")

    LOGGER.info(f"Crew scan complete: {len(agents)} agents")
    return agents


def load_tasks_from_config(config_path: Path | str) -> List[TaskSpec]:
    config = load_crew_config(config_path)
    return [parse_task_spec(entry) for entry in config.get("tasks") or []]


__all__ = [
    "load_crew_config",
    "parse_agent_spec",
    "parse_task_spec",
    "build_agent",
    "load_agents_from_config",
    "load_tasks_from_config",
]
