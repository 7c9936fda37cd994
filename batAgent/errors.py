"""Error taxonomy for batAgent agents, tasks and the orchestrator."""

from __future__ import annotations

from typing import Optional, Sequence


class BatError(Exception):
    """Base exception for batAgent errors."""

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class AgentNotFound(BatError):
    """No managed agent has the requested role."""

    def __init__(self, role: str):
        super().__init__(f"No agent found with role: {role}")
        self.role = role


class TimeoutExceeded(BatError):
    """A single task attempt ran past its deadline."""

    def __init__(self, timeout_ms: int):
        super().__init__(f"Task timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class ToolExecutionFailed(BatError):
    """A selected tool reported failure."""

    def __init__(self, tool_name: str, detail: str):
        super().__init__(f"Tool execution failed: {detail}")
        self.tool_name = tool_name
        self.detail = detail


class RetryExhausted(BatError):
    """Final task error after every attempt failed."""

    def __init__(self, last_error: BaseException, attempts: int):
        super().__init__(f"Task execution failed after {attempts} attempts: {last_error}")
        self.last_error = last_error
        self.attempts = attempts

    @property
    def attempt_count(self) -> int:
        return self.attempts


class OracleResponseUnparseable(BatError):
    """The oracle reply did not match the expected schema.

    Raised by the decoding layer only; the resolver catches it and degrades to
    "no decision" for the current attempt.
    """

    def __init__(self, kind: str, raw_response: str, reason: str):
        super().__init__(f"Unparseable {kind} response: {reason}")
        self.kind = kind
        self.raw_response = raw_response
        self.reason = reason


class DelegationCycle(BatError):
    """Delegation revisited a role or went deeper than allowed."""

    def __init__(self, chain: Sequence[str], target_role: str, max_depth: Optional[int] = None):
        path = " -> ".join([*chain, target_role])
        if max_depth is not None and target_role not in chain:
            message = f"Delegation depth limit {max_depth} exceeded: {path}"
        else:
            message = f"Delegation cycle detected: {path}"
        super().__init__(message)
        self.chain = tuple(chain)
        self.target_role = target_role
        self.max_depth = max_depth


class AgentExecutionError(BatError):
    """Oracle or transport failure while an agent was executing a task."""

    def __init__(self, detail: str):
        super().__init__(f"Agent execution failed: {detail}")
        self.detail = detail


class MemoryConfigError(BatError):
    """Invalid memory factory configuration."""
    pass


__all__ = [
    "BatError",
    "AgentNotFound",
    "TimeoutExceeded",
    "ToolExecutionFailed",
    "RetryExhausted",
    "OracleResponseUnparseable",
    "DelegationCycle",
    "AgentExecutionError",
    "MemoryConfigError",
]
