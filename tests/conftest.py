"""Pytest configuration and fixtures for all tests.

This file is automatically loaded by pytest and ensures proper test environment setup.
"""

import sys
from pathlib import Path
from typing import Callable, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.messages import AIMessage

# Ensure project root is in PYTHONPATH for imports to work
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from batAgent.config import GovernanceSettings, Settings, TaskDefaults  # noqa: E402


def _scripted_model(*responses):
    """Chat model mock replying with ``responses`` in order (exceptions are raised)."""
    model = MagicMock()
    model.ainvoke = AsyncMock(
        side_effect=[r if isinstance(r, BaseException) else AIMessage(content=r) for r in responses]
    )
    return model


def _routed_model(routes: Dict[str, str], default: str = "no"):
    """Chat model mock answering by the first route key found in the prompt.

    Used where concurrent tasks share one agent and reply order is not fixed.
    """

    def reply(prompt):
        text = str(prompt)
        for marker, answer in routes.items():
            if marker in text:
                return AIMessage(content=answer)
        return AIMessage(content=default)

    model = MagicMock()
    model.ainvoke = AsyncMock(side_effect=reply)
    return model


@pytest.fixture
def scripted_model() -> Callable[..., MagicMock]:
    return _scripted_model


@pytest.fixture
def routed_model() -> Callable[..., MagicMock]:
    return _routed_model


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with short timeouts and no retry delay."""
    return Settings(
        tasks=TaskDefaults(timeout_ms=1000, max_retries=3, retry_delay_ms=0),
        governance=GovernanceSettings(max_delegation_depth=3),
    )
