"""Environment-bound configuration objects.

This module provides Pydantic BaseSettings-based configuration loading from .env files.
All settings classes automatically load from environment variables with support for
multiple alias names (e.g., BAT_MODEL and OPENAI_MODEL both work).

Example:
    from batAgent.config.settings import get_settings

    settings = get_settings()  # Cached singleton
    api_key = settings.oracle.api_key
    timeout = settings.tasks.timeout_ms
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


load_dotenv()


class OracleSettings(BaseSettings):
    """Reasoning oracle (chat model) identifier and credentials.

    Loads from .env with alias names:
    - BAT_MODEL, OPENAI_MODEL (model id)
    - BAT_API_KEY, OPENAI_API_KEY (credential)
    - BAT_BASE_URL, OPENAI_BASE_URL (OpenAI-compatible endpoint)
    """

    model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("BAT_MODEL", "OPENAI_MODEL"),
    )
    api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("BAT_API_KEY", "OPENAI_API_KEY"),
    )
    base_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("BAT_BASE_URL", "OPENAI_BASE_URL"),
    )
    temperature: float = Field(
        default=0.7, ge=0.0, le=2.0,
        validation_alias=AliasChoices("BAT_TEMPERATURE"),
    )
    max_tokens: int = Field(
        default=2000, ge=1,
        validation_alias=AliasChoices("BAT_MAX_TOKENS"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class TaskDefaults(BaseSettings):
    """Defaults applied by the orchestrator when add_task omits a value."""

    priority: Literal["high", "medium", "low"] = Field(
        default="medium", validation_alias=AliasChoices("BAT_TASK_PRIORITY")
    )
    timeout_ms: int = Field(
        default=30000, gt=0, validation_alias=AliasChoices("BAT_TASK_TIMEOUT_MS")
    )
    max_retries: int = Field(
        default=3, ge=1, validation_alias=AliasChoices("BAT_TASK_MAX_RETRIES")
    )
    retry_delay_ms: int = Field(
        default=1000, ge=0, validation_alias=AliasChoices("BAT_TASK_RETRY_DELAY_MS")
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class GovernanceSettings(BaseSettings):
    """Runtime governance and control settings.

    - max_delegation_depth: Longest delegation chain before DelegationCycle (1-20, default: 3)
    - max_concurrency: Worker pool size for kickoff (None = launch every task at once)
    """

    max_delegation_depth: int = Field(
        default=3, ge=1, le=20, validation_alias=AliasChoices("BAT_MAX_DELEGATION_DEPTH")
    )
    max_concurrency: Optional[int] = Field(
        default=None, ge=1, validation_alias=AliasChoices("BAT_MAX_CONCURRENCY")
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    log_dir: str = Field(default="logs", validation_alias=AliasChoices("BAT_LOG_DIR"))
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("BAT_LOG_LEVEL", "LOG_LEVEL"))
    log_prompt_max_length: int = Field(
        default=500, ge=100, le=5000, validation_alias=AliasChoices("LOG_PROMPT_MAX_LENGTH")
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Root application settings loaded from .env file.

    Hierarchical structure containing four nested settings groups:
    - oracle: Chat model routing and credentials (OracleSettings)
    - tasks: Task construction defaults (TaskDefaults)
    - governance: Delegation and concurrency limits (GovernanceSettings)
    - observability: Logging (ObservabilitySettings)

    Use get_settings() to obtain a cached singleton instance.
    """

    environment: str = Field(default="dev", alias="APP_ENV")
    oracle: OracleSettings = Field(default_factory=OracleSettings)
    tasks: TaskDefaults = Field(default_factory=TaskDefaults)
    governance: GovernanceSettings = Field(default_factory=GovernanceSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        case_sensitive=False,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton Settings instance.

    Returns:
        Settings: Cached application settings instance
    """
    return Settings()
