"""Unit tests for environment-bound settings."""
import pytest
from pydantic import ValidationError

from batAgent.config import (
    GovernanceSettings,
    ObservabilitySettings,
    OracleSettings,
    Settings,
    TaskDefaults,
    get_settings,
)

ENV_VARS = [
    "BAT_MODEL", "OPENAI_MODEL", "BAT_API_KEY", "OPENAI_API_KEY", "BAT_BASE_URL", "OPENAI_BASE_URL",
    "BAT_TASK_PRIORITY", "BAT_TASK_TIMEOUT_MS", "BAT_TASK_MAX_RETRIES", "BAT_TASK_RETRY_DELAY_MS",
    "BAT_MAX_DELEGATION_DEPTH", "BAT_MAX_CONCURRENCY", "BAT_LOG_LEVEL", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestTaskDefaults:
    def test_defaults(self, clean_env):
        defaults = TaskDefaults(_env_file=None)
        assert defaults.priority == "medium"
        assert defaults.timeout_ms == 30000
        assert defaults.max_retries == 3
        assert defaults.retry_delay_ms == 1000

    def test_env_override(self, clean_env):
        clean_env.setenv("BAT_TASK_TIMEOUT_MS", "5000")
        clean_env.setenv("BAT_TASK_PRIORITY", "high")
        defaults = TaskDefaults(_env_file=None)
        assert defaults.timeout_ms == 5000
        assert defaults.priority == "high"

    def test_field_names_accepted(self, clean_env):
        assert TaskDefaults(_env_file=None, max_retries=1).max_retries == 1

    @pytest.mark.parametrize("field, value", [("timeout_ms", 0), ("max_retries", 0), ("retry_delay_ms", -1)])
    def test_invalid_values(self, clean_env, field, value):
        with pytest.raises(ValidationError):
            TaskDefaults(_env_file=None, **{field: value})

    def test_invalid_priority(self, clean_env):
        clean_env.setenv("BAT_TASK_PRIORITY", "urgent")
        with pytest.raises(ValidationError):
            TaskDefaults(_env_file=None)


class TestOracleSettings:
    def test_openai_aliases(self, clean_env):
        clean_env.setenv("OPENAI_MODEL", "gpt-4o")
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        oracle = OracleSettings(_env_file=None)
        assert oracle.model == "gpt-4o"
        assert oracle.api_key == "sk-test"

    def test_bat_alias_preferred(self, clean_env):
        clean_env.setenv("BAT_MODEL", "local-model")
        clean_env.setenv("OPENAI_MODEL", "gpt-4o")
        assert OracleSettings(_env_file=None).model == "local-model"


class TestGovernanceSettings:
    def test_defaults(self, clean_env):
        governance = GovernanceSettings(_env_file=None)
        assert governance.max_delegation_depth == 3
        assert governance.max_concurrency is None

    def test_env_override(self, clean_env):
        clean_env.setenv("BAT_MAX_CONCURRENCY", "4")
        clean_env.setenv("BAT_MAX_DELEGATION_DEPTH", "5")
        governance = GovernanceSettings(_env_file=None)
        assert governance.max_concurrency == 4
        assert governance.max_delegation_depth == 5

    def test_depth_bounds(self, clean_env):
        with pytest.raises(ValidationError):
            GovernanceSettings(_env_file=None, max_delegation_depth=0)
        with pytest.raises(ValidationError):
            GovernanceSettings(_env_file=None, max_delegation_depth=21)


class TestSettings:
    def test_nested_groups(self, clean_env):
        settings = Settings(_env_file=None)
        assert isinstance(settings.oracle, OracleSettings)
        assert isinstance(settings.tasks, TaskDefaults)
        assert isinstance(settings.governance, GovernanceSettings)
        assert isinstance(settings.observability, ObservabilitySettings)
        assert settings.observability.log_dir == "logs"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
