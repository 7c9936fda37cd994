"""Prompt templates for the capability resolver phases."""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Sequence

from langchain_core.messages import BaseMessage
from langchain_core.prompts import PromptTemplate

from batAgent.utils.message_utils import message_text

_IDENTITY = """You are a {role}.
Your goal is: {goal}
Your backstory: {backstory}
"""

TOOL_SELECTION_PROMPT = PromptTemplate.from_template(
    _IDENTITY
    + """
Available tools:
{tool_catalog}

Task: {task}

Select the most appropriate tool and provide input parameters.
Respond with a valid JSON object in this exact format (no markdown, no code blocks):
{{
  "tool": "tool_name",
  "input": {{
    "param1": "value1",
    "param2": "value2"
  }}
}}
"""
)

CAPABILITY_CHECK_PROMPT = PromptTemplate.from_template(
    _IDENTITY
    + """Your capabilities: {capabilities}

Task: {task}

Can you handle this task effectively? Answer with only "yes" or "no".
"""
)

DELEGATION_PROMPT = PromptTemplate.from_template(
    _IDENTITY
    + """Your capabilities: {capabilities}

Available agents:
{agent_catalog}

Task: {task}

Should this task be delegated to another agent? If yes, provide:
1. The reason for delegation
2. The role of the most suitable agent

Respond with a valid JSON object in this exact format (no markdown, no code blocks):
{{
  "shouldDelegate": true or false,
  "reason": "explanation of why delegation is needed",
  "targetAgentRole": "role of the agent to delegate to"
}}
"""
)

DIRECT_EXECUTION_PROMPT = PromptTemplate.from_template(
    _IDENTITY
    + """
Available tools: {tool_names}

Task: {task}

Please provide a detailed response to complete this task.
"""
)

MEMORY_CONTEXT_PROMPT = PromptTemplate.from_template(
    """Previous Context:
{context}

{prompt}"""
)


def build_tool_catalog(tools: Iterable[Any]) -> str:
    lines: List[str] = []
    for tool in tools:
        params = json.dumps(tool.parameters, ensure_ascii=False, default=str)
        lines.append(f"- {tool.name}: {tool.description}\n  Parameters: {params}")
    return "\n".join(lines)


def build_agent_catalog(agents: Iterable[Any]) -> str:
    return "\n".join(f"- {agent.role}: {', '.join(agent.capabilities)}" for agent in agents)


def with_memory_context(prompt: str, previous: Sequence[BaseMessage]) -> str:
    if not previous:
        return prompt
    context = "\n".join(f"{msg.type}: {message_text(msg.content)}" for msg in previous)
    return MEMORY_CONTEXT_PROMPT.format(context=context, prompt=prompt)


__all__ = [
    "TOOL_SELECTION_PROMPT",
    "CAPABILITY_CHECK_PROMPT",
    "DELEGATION_PROMPT",
    "DIRECT_EXECUTION_PROMPT",
    "build_tool_catalog",
    "build_agent_catalog",
    "with_memory_context",
]
