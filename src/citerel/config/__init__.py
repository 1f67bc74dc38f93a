"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .relations import RelationsConfig, get_relations_config
from .semanticscholar import SemanticScholarConfig, get_semanticscholar_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RelationsConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SemanticScholarConfig",
    "configure_logging",
    "get_relations_config",
    "get_semanticscholar_config",
    "optional_env_var",
    "require_env_vars",
]
