"""Agent and task definitions as read from crew configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class AgentSpec:
    """Declarative description of an agent.

    Attributes:
        role: Unique role (lookup key and delegation target)
        goal: Agent goal
        backstory: Free-text backstory used in prompts
        capabilities: Capability tags
        tools: Tool names resolved through a ToolRegistry
        memory: Memory factory options ({"type": "buffer", ...}), None for no memory
    """

    role: str
    goal: str
    backstory: str = ""
    capabilities: List[str] = field(default_factory=list)
    tools: List[str] = field(default_factory=list)
    memory: Optional[Dict[str, Any]] = None


@dataclass(frozen=True, slots=True)
class TaskSpec:
    """Declarative description of a task; None values fall back to settings."""

    description: str
    agent: str
    priority: Optional[str] = None
    timeout_ms: Optional[int] = None
    max_retries: Optional[int] = None
    retry_delay_ms: Optional[int] = None


__all__ = ["AgentSpec", "TaskSpec"]
