"""Configuration exports."""

from .settings import (
    GovernanceSettings,
    ObservabilitySettings,
    OracleSettings,
    Settings,
    TaskDefaults,
    get_settings,
)
from .project_root import get_project_root, resolve_project_path

__all__ = [
    "GovernanceSettings",
    "ObservabilitySettings",
    "OracleSettings",
    "Settings",
    "TaskDefaults",
    "get_settings",
    "get_project_root",
    "resolve_project_path",
]
