"""Tool adapter: uniform execute() contract over LangChain tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from langchain_core.tools import BaseTool

from batAgent.utils.logging_utils import log_tool_call, log_tool_result

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of one tool execution."""

    success: bool
    result: Any = None
    error: Optional[str] = None


class AgentTool:
    """Wraps a LangChain ``BaseTool`` so agents see name/description/parameters
    and call ``execute(input) -> ToolResult`` without handling exceptions."""

    def __init__(self, tool: BaseTool) -> None:
        self._tool = tool

    @property
    def name(self) -> str:
        return self._tool.name

    @property
    def description(self) -> str:
        return self._tool.description

    @property
    def parameters(self) -> Dict[str, Any]:
        # JSON schema properties of the tool's args model
        return dict(self._tool.args)

    @property
    def tool(self) -> BaseTool:
        return self._tool

    async def execute(self, tool_input: Any) -> ToolResult:
        payload = tool_input if tool_input is not None else {}
        log_tool_call(LOGGER, self.name, payload if isinstance(payload, dict) else {"input": payload})
        try:
            result = await self._tool.ainvoke(payload)
        except Exception as exc:  # noqa: BLE001 - reported through ToolResult
            log_tool_result(LOGGER, self.name, exc, success=False)
            return ToolResult(success=False, error=str(exc) or type(exc).__name__)
        log_tool_result(LOGGER, self.name, result)
        return ToolResult(success=True, result=result)

    def __repr__(self) -> str:
        return f"AgentTool(name={self.name!r})"


def as_agent_tool(tool: Any) -> Any:
    """Wrap LangChain tools; pass through objects that already expose execute()."""

    if isinstance(tool, BaseTool):
        return AgentTool(tool)
    if hasattr(tool, "execute") and hasattr(tool, "name"):
        return tool
    raise TypeError(f"Unsupported tool object: {tool!r}")


__all__ = ["ToolResult", "AgentTool", "as_agent_tool"]
