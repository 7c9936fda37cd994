"""Schema-validated decoding of oracle replies.

Oracle replies are free text. The decision points of the capability resolver
expect structured objects, so every reply goes through one of the decoders
below. A reply that does not match raises ``OracleResponseUnparseable``; that
is a protocol violation and is kept distinct from a well-formed negative
decision (``shouldDelegate: false``, capability answer ``"no"``).
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from batAgent.errors import OracleResponseUnparseable

_FENCE_RE = re.compile(r"```[a-zA-Z]*\n?|\n?```")

ModelT = TypeVar("ModelT", bound=BaseModel)


class ToolSelection(BaseModel):
    """{"tool": str, "input": object}"""

    model_config = ConfigDict(extra="ignore")

    tool: str = Field(min_length=1)
    input: Dict[str, Any] = Field(default_factory=dict)


class DelegationDecision(BaseModel):
    """{"shouldDelegate": bool, "reason": str, "targetAgentRole": str}"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    should_delegate: bool = Field(alias="shouldDelegate")
    reason: str = ""
    target_agent_role: str = Field(default="", alias="targetAgentRole")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers (```json ... ```) around a reply."""
    return _FENCE_RE.sub("", text).strip()


def _decode(kind: str, text: str, model: Type[ModelT]) -> ModelT:
    cleaned = strip_code_fences(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise OracleResponseUnparseable(kind, text, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(payload, dict):
        raise OracleResponseUnparseable(kind, text, f"expected a JSON object, got {type(payload).__name__}")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise OracleResponseUnparseable(kind, text, f"schema mismatch ({exc.error_count()} errors)") from exc


def decode_tool_selection(text: str) -> ToolSelection:
    return _decode("tool selection", text, ToolSelection)


def decode_delegation(text: str) -> DelegationDecision:
    return _decode("delegation", text, DelegationDecision)


def decode_capability_answer(text: str) -> bool:
    """Case/whitespace-insensitive comparison with "yes"; anything else is "no"."""
    return text.strip().lower() == "yes"


__all__ = [
    "ToolSelection",
    "DelegationDecision",
    "strip_code_fences",
    "decode_tool_selection",
    "decode_delegation",
    "decode_capability_answer",
]
