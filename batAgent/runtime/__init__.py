"""Runtime wiring."""

from .model_resolver import build_model_resolver, build_oracle, resolve_oracle_config

__all__ = ["build_model_resolver", "build_oracle", "resolve_oracle_config"]
