"""Current time, for agents that need to date their answers."""

from datetime import datetime, timedelta, timezone

from langchain_core.tools import tool


@tool
def now(offset_hours: float = 0.0) -> str:
    """Return the current time as an ISO 8601 string.

    Args:
        offset_hours: UTC offset of the result, between -14 and 14 (default: UTC)
    """
    if not -14 <= offset_hours <= 14:
        raise ValueError(f"offset_hours out of range: {offset_hours}")
    return datetime.now(timezone(timedelta(hours=offset_hours))).isoformat()


__all__ = ["now"]
