"""Identifier service configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .env import env_int, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

CACHE_BACKENDS: Final[tuple[str, ...]] = ("memory", "sqlite", "none")


@dataclass(frozen=True, slots=True)
class IdentityConfig:
    resilience: ResilienceConfig


def _cache_config() -> CacheConfig | None:
    backend = (os.getenv("IDENTITY_CACHE") or "memory").strip().lower()
    if backend not in CACHE_BACKENDS:
        raise ConfigurationError(
            f"IDENTITY_CACHE must be one of {', '.join(CACHE_BACKENDS)}, got {backend!r}",
            setting="IDENTITY_CACHE",
        )
    if backend == "none":
        return None
    return CacheConfig(backend="sqlite" if backend == "sqlite" else "memory")


def get_identity_config() -> IdentityConfig:
    values = require_env_vars(("IDENTITY_SERVICE_URL", "IDENTITY_SERVICE_TOKEN"))
    token = values["IDENTITY_SERVICE_TOKEN"]

    resilience = ResilienceConfig(
        name="identity",
        base_url=values["IDENTITY_SERVICE_URL"].rstrip("/"),
        ratelimit=RateLimit(
            max_calls=env_int("IDENTITY_RATE_LIMIT", 20, minimum=1), per_seconds=1.0
        ),
        retry=RetryPolicy(total=4),
        cache=_cache_config(),
        default_headers={"Authorization": f"Bearer {token}"},
    )

    return IdentityConfig(resilience=resilience)
