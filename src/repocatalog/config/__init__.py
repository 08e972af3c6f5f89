"""Application configuration helpers."""

from __future__ import annotations

from .env import env_int, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .identity import IdentityConfig, get_identity_config
from .logging import configure_logging
from .search import SearchConfig, get_search_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "IdentityConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SearchConfig",
    "StorageConfig",
    "configure_logging",
    "env_int",
    "get_database_config",
    "get_identity_config",
    "get_search_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
