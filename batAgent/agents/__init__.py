"""Agents, capability resolution and crew loading."""

from .agent import Agent
from .decoding import DelegationDecision, ToolSelection
from .interfaces import AgentMemory, ModelResolver, ReasoningOracle, ToolLike
from .registry import AgentRegistry
from .resolver import CapabilityResolver
from .schema import AgentSpec, TaskSpec
from .scanner import load_agents_from_config, load_tasks_from_config

__all__ = [
    "Agent",
    "DelegationDecision",
    "ToolSelection",
    "AgentMemory",
    "ModelResolver",
    "ReasoningOracle",
    "ToolLike",
    "AgentRegistry",
    "CapabilityResolver",
    "AgentSpec",
    "TaskSpec",
    "load_agents_from_config",
    "load_tasks_from_config",
]
