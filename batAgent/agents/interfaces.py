"""Interfaces for agent collaborators."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from langchain_core.messages import BaseMessage


class ReasoningOracle(Protocol):
    """LangChain-compatible chat model: prompt text in, message out."""

    async def ainvoke(self, input: Any, *args: Any, **kwargs: Any) -> BaseMessage:
        ...


@runtime_checkable
class AgentMemory(Protocol):
    """Conversation memory owned by a single agent."""

    async def load_context(self, scope: Dict[str, Any]) -> List[BaseMessage]:
        ...

    async def save_context(self, input: str, output: str) -> None:
        ...


class ToolLike(Protocol):
    """Invocable named operation with a parameter schema."""

    name: str
    description: str
    parameters: Dict[str, Any]

    async def execute(self, tool_input: Any) -> Any:
        ...


class ModelResolver(Protocol):
    """Callable that returns a LangChain-compatible model runnable."""

    def __call__(self, model_id: str):
        ...


__all__ = ["ReasoningOracle", "AgentMemory", "ToolLike", "ModelResolver"]
