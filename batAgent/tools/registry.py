"""Tool registration by name."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .base import as_agent_tool


class ToolRegistry:
    """Tracks tool instances available to agent definitions."""

    def __init__(self, tools: Optional[Iterable[Any]] = None) -> None:
        self._tools: Dict[str, Any] = {}
        if tools:
            for tool in tools:
                self.register_tool(tool)

    def register_tool(self, tool: Any) -> None:
        wrapped = as_agent_tool(tool)
        self._tools[wrapped.name] = wrapped

    def get_tool(self, name: str) -> Any:
        if name not in self._tools:
            raise KeyError(f"Unknown tool: {name}")
        return self._tools[name]

    def list_tools(self) -> List[Any]:
        return list(self._tools.values())

    def allowed_tools(self, allowlist: Optional[Iterable[str]]) -> List[Any]:
        """Resolve an ordered list of tool names; unknown names raise KeyError."""
        if not allowlist:
            return []
        return [self.get_tool(name) for name in allowlist]


def build_default_tool_registry() -> ToolRegistry:
    from .builtin import BUILTIN_TOOLS

    return ToolRegistry(BUILTIN_TOOLS)


__all__ = ["ToolRegistry", "build_default_tool_registry"]
