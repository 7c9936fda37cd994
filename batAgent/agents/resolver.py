"""Capability resolver - per-task decision protocol of an agent.

States, in order, terminating at the first one that yields a result:

    ToolSelection -> CapabilityCheck -> Delegation -> DirectExecution

Unparseable oracle replies never abort the protocol; they are logged as
warnings and treated as "no decision" for the current attempt. Oracle and
transport failures abort it and surface as ``AgentExecutionError``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

from batAgent.config import Settings, get_settings
from batAgent.errors import (
    AgentExecutionError,
    BatError,
    DelegationCycle,
    OracleResponseUnparseable,
    ToolExecutionFailed,
)
from batAgent.utils.logging_utils import log_delegation, log_prompt
from batAgent.utils.message_utils import response_text

from .decoding import (
    DelegationDecision,
    decode_capability_answer,
    decode_delegation,
    decode_tool_selection,
)
from .prompts import (
    CAPABILITY_CHECK_PROMPT,
    DELEGATION_PROMPT,
    DIRECT_EXECUTION_PROMPT,
    TOOL_SELECTION_PROMPT,
    build_agent_catalog,
    build_tool_catalog,
    with_memory_context,
)

if TYPE_CHECKING:
    from .agent import Agent

LOGGER = logging.getLogger(__name__)


class CapabilityResolver:
    """Turns a task description into a tool call, a delegation or a direct answer."""

    def __init__(self, agent: "Agent") -> None:
        self._agent = agent

    # ========== Oracle access ==========

    async def query(self, phase: str, prompt: str, settings: Optional[Settings] = None) -> str:
        settings = settings or get_settings()
        log_prompt(LOGGER, f"{self._agent.role}/{phase}", prompt,
                   settings.observability.log_prompt_max_length)
        response = await self._agent.model.ainvoke(prompt)
        return response_text(response)

    def _identity(self) -> dict:
        agent = self._agent
        return {"role": agent.role, "goal": agent.goal, "backstory": agent.backstory}

    # ========== ToolSelection ==========

    async def select_tool(
        self, task_description: str, settings: Optional[Settings] = None
    ) -> Optional[Tuple[Any, dict]]:
        """Ask the oracle which tool to use; None when no usable selection."""
        tools = self._agent.get_available_tools()
        if not tools:
            return None

        prompt = TOOL_SELECTION_PROMPT.format(
            **self._identity(),
            tool_catalog=build_tool_catalog(tools),
            task=task_description,
        )
        raw = (await self.query("tool_selection", prompt, settings)).strip()

        try:
            selection = decode_tool_selection(raw)
        except OracleResponseUnparseable as exc:
            LOGGER.warning(f"[{self._agent.role}] {exc}")
            LOGGER.debug(f"  Raw response: {exc.raw_response}")
            return None

        tool = self._agent.find_tool(selection.tool)
        if tool is None:
            LOGGER.info(f"[{self._agent.role}] Oracle selected unknown tool '{selection.tool}', skipping tool use")
            return None
        return tool, selection.input

    async def use_tool(self, tool: Any, tool_input: dict) -> str:
        result = await tool.execute(tool_input)
        if not result.success:
            raise ToolExecutionFailed(tool.name, str(result.error))
        return json.dumps(result.result, ensure_ascii=False, default=str)

    # ========== CapabilityCheck ==========

    async def can_handle_task(self, task_description: str, settings: Optional[Settings] = None) -> bool:
        prompt = CAPABILITY_CHECK_PROMPT.format(
            **self._identity(),
            capabilities=", ".join(self._agent.capabilities),
            task=task_description,
        )
        answer = await self.query("capability_check", prompt, settings)
        return decode_capability_answer(answer)

    # ========== Delegation ==========

    async def should_delegate_task(
        self,
        task_description: str,
        available_agents: Sequence["Agent"],
        settings: Optional[Settings] = None,
    ) -> Optional[DelegationDecision]:
        """Ask the oracle for a delegation recommendation.

        Returns None for a negative decision and for an unparseable reply; the
        two cases are logged at different levels.
        """
        prompt = DELEGATION_PROMPT.format(
            **self._identity(),
            capabilities=", ".join(self._agent.capabilities),
            agent_catalog=build_agent_catalog(available_agents),
            task=task_description,
        )
        raw = (await self.query("delegation", prompt, settings)).strip()

        try:
            decision = decode_delegation(raw)
        except OracleResponseUnparseable as exc:
            LOGGER.warning(f"[{self._agent.role}] {exc}")
            LOGGER.debug(f"  Raw response: {exc.raw_response}")
            return None

        if not decision.should_delegate:
            LOGGER.info(f"[{self._agent.role}] Oracle advised against delegation")
            return None
        return decision

    def _check_chain(
        self, chain: Tuple[str, ...], target_role: str, settings: Optional[Settings] = None
    ) -> None:
        max_depth = self._agent.max_delegation_depth
        if max_depth is None:
            max_depth = (settings or get_settings()).governance.max_delegation_depth
        if target_role in chain:
            raise DelegationCycle(chain, target_role)
        if len(chain) > max_depth:
            raise DelegationCycle(chain, target_role, max_depth=max_depth)

    # ========== DirectExecution ==========

    async def execute_directly(self, task_description: str, settings: Optional[Settings] = None) -> str:
        agent = self._agent
        prompt = DIRECT_EXECUTION_PROMPT.format(
            **self._identity(),
            tool_names=", ".join(tool.name for tool in agent.get_available_tools()),
            task=task_description,
        )

        previous: List[Any] = []
        if agent.memory is not None:
            previous = await agent.memory.load_context({"input": task_description})

        result = await self.query("direct_execution", with_memory_context(prompt, previous), settings)

        if agent.memory is not None:
            await agent.memory.save_context(task_description, result)
        return result

    # ========== Protocol ==========

    async def resolve(
        self,
        task_description: str,
        available_agents: Sequence["Agent"] = (),
        delegation_chain: Sequence[str] = (),
        settings: Optional[Settings] = None,
    ) -> str:
        """Run the protocol for one task.

        ``settings`` (limits and log options) is forwarded to delegatees; when
        None the process-wide settings apply.
        """
        agent = self._agent
        chain = (*delegation_chain, agent.role)

        try:
            selection = await self.select_tool(task_description, settings)
            if selection is not None:
                tool, tool_input = selection
                LOGGER.info(f"[{agent.role}] Using tool '{tool.name}'")
                return await self.use_tool(tool, tool_input)

            candidates = [other for other in available_agents if other.role != agent.role]
            can_handle = await self.can_handle_task(task_description, settings)

            if not can_handle and candidates:
                decision = await self.should_delegate_task(task_description, candidates, settings)
                if decision is not None:
                    target = next(
                        (other for other in candidates if other.role == decision.target_agent_role),
                        None,
                    )
                    if target is None:
                        LOGGER.warning(
                            f"[{agent.role}] Delegation target '{decision.target_agent_role}' "
                            f"is not available, executing directly"
                        )
                    else:
                        self._check_chain(chain, target.role, settings)
                        log_delegation(LOGGER, agent.role, target.role, decision.reason)
                        delegated = await target.execute(
                            task_description,
                            available_agents,
                            delegation_chain=chain,
                            settings=settings,
                        )
                        return f"Task delegated to {target.role}:\n{delegated}"

            return await self.execute_directly(task_description, settings)
        except BatError:
            raise
        except Exception as exc:
            raise AgentExecutionError(str(exc) or type(exc).__name__) from exc


__all__ = ["CapabilityResolver"]
