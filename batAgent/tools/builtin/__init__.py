"""Built-in tools."""

from .calc import calc
from .now import now

BUILTIN_TOOLS = [now, calc]

__all__ = ["BUILTIN_TOOLS", "calc", "now"]
