"""Tool adapters and registry."""

from .base import AgentTool, ToolResult, as_agent_tool
from .registry import ToolRegistry, build_default_tool_registry

__all__ = [
    "AgentTool",
    "ToolResult",
    "as_agent_tool",
    "ToolRegistry",
    "build_default_tool_registry",
]
