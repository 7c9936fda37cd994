"""In-process agent memory strategies and their factory.

All strategies store exchanges in a LangChain ``InMemoryChatMessageHistory``
and expose the agent memory contract:

    await memory.load_context(scope) -> list[BaseMessage]
    await memory.save_context(input, output)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from langchain_core.chat_history import InMemoryChatMessageHistory
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage, trim_messages
from langchain_core.prompts import PromptTemplate

from batAgent.errors import MemoryConfigError
from batAgent.utils.message_utils import message_text, response_text

LOGGER = logging.getLogger(__name__)

MemoryType = Literal["buffer", "buffer-window", "token-buffer", "summary"]

# Backends that need external stores; not provided by this package.
_REMOTE_MEMORY_TYPES = {"vector-store", "combined", "mongodb", "redis", "motorhead"}

SUMMARY_PROMPT = PromptTemplate.from_template(
    """Progressively summarize the lines of conversation provided, adding onto the previous summary and returning a new summary.

Current summary:
{summary}

New lines of conversation:
{new_lines}

New summary:"""
)


def approximate_token_count(messages: List[BaseMessage]) -> int:
    """Rough token estimate (4 characters per token, plus per-message overhead)."""
    return sum(len(message_text(msg.content)) // 4 + 3 for msg in messages)


class BufferMemory:
    """Keeps every exchange."""

    def __init__(self) -> None:
        self._history = InMemoryChatMessageHistory()

    async def load_context(self, scope: Optional[Dict[str, Any]] = None) -> List[BaseMessage]:
        return list(await self._history.aget_messages())

    async def save_context(self, input: str, output: str) -> None:
        await self._history.aadd_messages([HumanMessage(content=input), AIMessage(content=output)])

    def clear(self) -> None:
        self._history.clear()


class BufferWindowMemory(BufferMemory):
    """Keeps only the last ``k`` exchanges visible."""

    def __init__(self, k: int = 3) -> None:
        if k < 1:
            raise MemoryConfigError("buffer-window memory requires k >= 1")
        super().__init__()
        self.k = k

    async def load_context(self, scope: Optional[Dict[str, Any]] = None) -> List[BaseMessage]:
        messages = await super().load_context(scope)
        return messages[-2 * self.k:]


class TokenBufferMemory(BufferMemory):
    """Keeps the most recent exchanges that fit in ``max_token_limit``."""

    def __init__(self, max_token_limit: int = 2000) -> None:
        if max_token_limit < 1:
            raise MemoryConfigError("token-buffer memory requires max_token_limit >= 1")
        super().__init__()
        self.max_token_limit = max_token_limit

    async def load_context(self, scope: Optional[Dict[str, Any]] = None) -> List[BaseMessage]:
        messages = await super().load_context(scope)
        return trim_messages(
            messages,
            max_tokens=self.max_token_limit,
            token_counter=approximate_token_count,
            strategy="last",
            start_on="human",
        )


class SummaryMemory:
    """Maintains a running summary written by a chat model."""

    def __init__(self, llm: Any) -> None:
        self.llm = llm
        self.summary = ""

    async def load_context(self, scope: Optional[Dict[str, Any]] = None) -> List[BaseMessage]:
        if not self.summary:
            return []
        return [SystemMessage(content=self.summary)]

    async def save_context(self, input: str, output: str) -> None:
        prompt = SUMMARY_PROMPT.format(
            summary=self.summary or "(empty)",
            new_lines=f"Human: {input}\nAI: {output}",
        )
        response = await self.llm.ainvoke(prompt)
        self.summary = response_text(response).strip()
        LOGGER.debug(f"Summary memory updated ({len(self.summary)} chars)")

    def clear(self) -> None:
        self.summary = ""


class MemoryFactory:
    """Creates agent memories by type name."""

    @staticmethod
    def create_memory(
        type: str,
        llm: Any = None,
        k: int = 3,
        max_token_limit: int = 2000,
        **options: Any,
    ):
        """Create a memory instance.

        Args:
            type: buffer | buffer-window | token-buffer | summary
            llm: Chat model, required for summary memory
            k: Number of exchanges kept by buffer-window memory
            max_token_limit: Token budget of token-buffer memory
            **options: Ignored extra keys from configuration files

        Raises:
            MemoryConfigError: Unknown type, remote backend, or missing llm
        """
        if options:
            LOGGER.debug(f"Ignoring memory options: {sorted(options)}")

        if type == "buffer":
            return BufferMemory()
        if type == "buffer-window":
            return BufferWindowMemory(k=k)
        if type == "token-buffer":
            return TokenBufferMemory(max_token_limit=max_token_limit)
        if type == "summary":
            if llm is None:
                raise MemoryConfigError("LLM is required for summary memory")
            return SummaryMemory(llm)
        if type in _REMOTE_MEMORY_TYPES:
            raise MemoryConfigError(f"Memory type '{type}' needs an external store and is not supported")
        raise MemoryConfigError(f"Unsupported memory type: {type}")


__all__ = [
    "MemoryType",
    "BufferMemory",
    "BufferWindowMemory",
    "TokenBufferMemory",
    "SummaryMemory",
    "MemoryFactory",
    "approximate_token_count",
]
