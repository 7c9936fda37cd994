"""Default oracle wiring using environment-derived settings.

Converts Pydantic settings into ChatOpenAI instances. Any OpenAI-compatible
endpoint works through ``base_url``.

Key Functions:
    - resolve_oracle_config(): Extract model config from settings
    - build_model_resolver(): Resolver function that returns model instances
    - build_oracle(): The configured oracle for agents
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, TypedDict

from langchain_openai import ChatOpenAI

from batAgent.agents.interfaces import ModelResolver
from batAgent.config import Settings, get_settings


class OracleConfig(TypedDict):
    id: str
    api_key: Optional[str]
    base_url: Optional[str]
    temperature: float
    max_tokens: int


def resolve_oracle_config(settings: Settings) -> OracleConfig:
    oracle = settings.oracle
    return {
        "id": oracle.model,
        "api_key": oracle.api_key,
        "base_url": oracle.base_url,
        "temperature": oracle.temperature,
        "max_tokens": oracle.max_tokens,
    }


def _chat_kwargs(config: OracleConfig) -> Dict[str, object]:
    if not config["api_key"]:
        raise RuntimeError(f"Missing API key for model {config['id']}; set BAT_API_KEY or OPENAI_API_KEY in .env")
    kwargs: Dict[str, object] = {
        "model": config["id"],
        "api_key": config["api_key"],
        "temperature": config["temperature"],
        "max_tokens": config["max_tokens"],
    }
    if config["base_url"]:
        kwargs["base_url"] = config["base_url"]
    return kwargs


def build_model_resolver(configs: Dict[str, OracleConfig]) -> ModelResolver:
    """Construct a resolver that returns ChatOpenAI clients by model id.

    Models are created lazily, on request.

    Raises (from the resolver):
        KeyError: Requested model id is not configured
        RuntimeError: API key is missing for the requested model
    """

    catalog: Dict[str, Callable[[], ChatOpenAI]] = {}
    for config in configs.values():
        catalog[config["id"]] = lambda cfg=config: ChatOpenAI(**_chat_kwargs(cfg))

    def resolver(model_id: str):
        if model_id not in catalog:
            raise KeyError(f"Model {model_id} is not configured")
        return catalog[model_id]()

    return resolver


def build_oracle(settings: Optional[Settings] = None) -> ChatOpenAI:
    """Return the configured reasoning oracle."""
    settings = settings or get_settings()
    config = resolve_oracle_config(settings)
    return build_model_resolver({"oracle": config})(config["id"])


__all__ = ["OracleConfig", "resolve_oracle_config", "build_model_resolver", "build_oracle"]
