"""Message formatting utilities."""

from __future__ import annotations

import json
from typing import Any


def message_text(content: Any) -> str:
    """Convert message content to string.

    Handles:
    - List content (multimodal messages), text parts concatenated
    - Dict parts with a "text" field
    - Simple string content
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        pieces: list[str] = []
        for item in content:
            if isinstance(item, dict) and "text" in item:
                pieces.append(str(item["text"]))
            elif isinstance(item, str):
                pieces.append(item)
            else:
                pieces.append(json.dumps(item, ensure_ascii=False, default=str))
        return "".join(pieces)
    return str(content)


def response_text(response: Any) -> str:
    """Text of an oracle reply (a LangChain message, or a plain string)."""
    return message_text(getattr(response, "content", response))


__all__ = ["message_text", "response_text"]
