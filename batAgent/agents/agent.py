"""Agent - an actor with a role, goal, tools and optional memory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence

from .decoding import DelegationDecision
from .interfaces import AgentMemory, ReasoningOracle
from .resolver import CapabilityResolver
from batAgent.tools.base import as_agent_tool

if TYPE_CHECKING:
    from batAgent.config import Settings

LOGGER = logging.getLogger(__name__)


class Agent:
    """Represents an intelligent agent with a specific role, goal and capabilities.

    Tools and capabilities are fixed at construction. The agent owns its memory
    and tool list but never other agents; delegation targets are passed in per
    call.

    Examples:
        >>> from langchain_openai import ChatOpenAI
        >>> researcher = Agent(
        ...     role="Research Assistant",
        ...     goal="Gather and analyze information",
        ...     backstory="An AI research assistant.",
        ...     model=ChatOpenAI(model="gpt-4o-mini"),
        ...     capabilities=["web_search"],
        ... )
        >>> result = await researcher.execute("Summarize the latest findings")
    """

    def __init__(
        self,
        role: str,
        goal: str,
        backstory: str,
        model: ReasoningOracle,
        memory: Optional[AgentMemory] = None,
        tools: Optional[Iterable[Any]] = None,
        capabilities: Optional[Iterable[str]] = None,
        max_delegation_depth: Optional[int] = None,
    ):
        """
        Args:
            role: Unique role, used for lookup and delegation targeting
            goal: Agent goal (prompt text)
            backstory: Agent backstory (prompt text)
            model: Reasoning oracle (LangChain chat model)
            memory: Optional conversation memory
            tools: LangChain tools or objects exposing name/description/parameters/execute
            capabilities: Capability tags
            max_delegation_depth: Override of the configured delegation depth limit (>= 1)
        """
        if not role:
            raise ValueError("Agent role must be a non-empty string")
        if max_delegation_depth is not None and max_delegation_depth < 1:
            raise ValueError(f"max_delegation_depth must be >= 1, got {max_delegation_depth}")
        self.role = role
        self.goal = goal
        self.backstory = backstory
        self.model = model
        self.memory = memory
        self.max_delegation_depth = max_delegation_depth
        self._tools = tuple(as_agent_tool(tool) for tool in (tools or ()))
        self.capabilities = tuple(dict.fromkeys(capabilities or ()))
        self._resolver = CapabilityResolver(self)

    def get_available_tools(self) -> List[Any]:
        return list(self._tools)

    def find_tool(self, name: str) -> Optional[Any]:
        return next((tool for tool in self._tools if tool.name == name), None)

    async def use_tool(self, tool_name: str, tool_input: Any) -> str:
        """Run one of this agent's tools and return its JSON-serialized result.

        Raises:
            KeyError: Tool is not in this agent's tool list
            ToolExecutionFailed: Tool reported failure
        """
        tool = self.find_tool(tool_name)
        if tool is None:
            raise KeyError(f"Tool {tool_name} not found")
        return await self._resolver.use_tool(tool, tool_input)

    async def can_handle_task(self, task_description: str) -> bool:
        return await self._resolver.can_handle_task(task_description)

    async def should_delegate_task(
        self,
        task_description: str,
        available_agents: Sequence["Agent"],
    ) -> Optional[DelegationDecision]:
        return await self._resolver.should_delegate_task(task_description, available_agents)

    async def execute(
        self,
        task_description: str,
        available_agents: Sequence["Agent"] = (),
        *,
        delegation_chain: Sequence[str] = (),
        settings: Optional["Settings"] = None,
    ) -> str:
        """Execute a task using tools, delegation or a direct oracle answer.

        Args:
            task_description: Description of the task
            available_agents: Agents this one may delegate to
            delegation_chain: Roles that already handed this task off
            settings: Settings of the calling orchestrator (defaults to get_settings())

        Raises:
            ToolExecutionFailed: Selected tool failed
            DelegationCycle: Delegation revisited a role or exceeded the depth limit
            AgentExecutionError: Oracle or transport failure
        """
        LOGGER.debug(f"[{self.role}] Executing task: {task_description[:100]}")
        return await self._resolver.resolve(task_description, available_agents, delegation_chain, settings)

    def __repr__(self) -> str:
        return f"Agent(role={self.role!r}, tools={[t.name for t in self._tools]!r})"


__all__ = ["Agent"]
