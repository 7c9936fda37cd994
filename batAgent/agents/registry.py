"""Agent registry - role-keyed lookup of managed agents."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from batAgent.errors import AgentNotFound

from .agent import Agent

LOGGER = logging.getLogger(__name__)


class AgentRegistry:
    """Holds the agents managed by an orchestrator, keyed by role.

    Roles are unique; registration order is kept and is the order agents are
    offered as delegation candidates.
    """

    def __init__(self, agents: Optional[Iterable[Agent]] = None) -> None:
        self._agents: Dict[str, Agent] = {}
        for agent in agents or ():
            self.register(agent)

    def register(self, agent: Agent) -> None:
        """Register an agent.

        Raises:
            ValueError: Another agent already uses the same role
        """
        if agent.role in self._agents:
            raise ValueError(f"Duplicate agent role: {agent.role}")
        self._agents[agent.role] = agent
        LOGGER.debug(f"Registered agent: {agent.role}")

    def require(self, role: str) -> Agent:
        agent = self._agents.get(role)
        if agent is None:
            raise AgentNotFound(role)
        return agent

    def list_agents(self) -> List[Agent]:
        return list(self._agents.values())


__all__ = ["AgentRegistry"]
