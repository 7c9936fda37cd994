"""Agent memory strategies."""

from .factory import (
    BufferMemory,
    BufferWindowMemory,
    MemoryFactory,
    MemoryType,
    SummaryMemory,
    TokenBufferMemory,
)

__all__ = [
    "BufferMemory",
    "BufferWindowMemory",
    "MemoryFactory",
    "MemoryType",
    "SummaryMemory",
    "TokenBufferMemory",
]
