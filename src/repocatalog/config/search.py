"""Search cluster and index publication settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .env import env_int

DEFAULT_ELASTICSEARCH_URL: Final[str] = "http://localhost:9200"
DEFAULT_INDEX_ALIAS: Final[str] = "icgc-repository"
DEFAULT_KEEP_GENERATIONS: Final[int] = 3
DEFAULT_BULK_BATCH_SIZE: Final[int] = 500
DEFAULT_REQUEST_TIMEOUT: Final[float] = 60.0


@dataclass(frozen=True, slots=True)
class SearchConfig:
    url: str = DEFAULT_ELASTICSEARCH_URL
    api_key: str | None = None
    alias: str = DEFAULT_INDEX_ALIAS
    keep_generations: int = DEFAULT_KEEP_GENERATIONS
    bulk_batch_size: int = DEFAULT_BULK_BATCH_SIZE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def get_search_config() -> SearchConfig:
    api_key = os.getenv("ELASTICSEARCH_API_KEY")
    return SearchConfig(
        url=os.getenv("ELASTICSEARCH_URL") or DEFAULT_ELASTICSEARCH_URL,
        api_key=api_key.strip() if api_key and api_key.strip() else None,
        alias=os.getenv("REPOCATALOG_INDEX_ALIAS") or DEFAULT_INDEX_ALIAS,
        keep_generations=env_int(
            "REPOCATALOG_KEEP_GENERATIONS", DEFAULT_KEEP_GENERATIONS, minimum=1
        ),
        bulk_batch_size=env_int("REPOCATALOG_BULK_BATCH_SIZE", DEFAULT_BULK_BATCH_SIZE, minimum=1),
    )
