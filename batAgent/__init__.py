"""batAgent - task orchestration over delegating LLM agents."""

from batAgent.agents import Agent, AgentRegistry
from batAgent.errors import (
    AgentExecutionError,
    AgentNotFound,
    BatError,
    DelegationCycle,
    MemoryConfigError,
    OracleResponseUnparseable,
    RetryExhausted,
    TimeoutExceeded,
    ToolExecutionFailed,
)
from batAgent.memory import MemoryFactory
from batAgent.orchestration import Bat
from batAgent.tasks import RetryConfig, Task, TaskPriority, TaskStatus
from batAgent.utils import TaskLogger

__version__ = "0.1.0"
__all__ = [
    "Agent",
    "AgentRegistry",
    "Bat",
    "MemoryFactory",
    "RetryConfig",
    "Task",
    "TaskLogger",
    "TaskPriority",
    "TaskStatus",
    "AgentExecutionError",
    "AgentNotFound",
    "BatError",
    "DelegationCycle",
    "MemoryConfigError",
    "OracleResponseUnparseable",
    "RetryExhausted",
    "TimeoutExceeded",
    "ToolExecutionFailed",
]
