"""Publication of the canonical catalog into search index generations.

Flow:
- ``IndexNamingScheme`` derives a sortable generation name from the alias
- ``IndexGenerationManager.build`` creates the index with ``IndexSchema``
- ``DocumentProjector`` streams repository, file and text documents into it
- ``verify`` checks the loaded count, ``swap`` moves the alias atomically
- ``prune`` keeps the newest generations and reports failed deletes
"""

from __future__ import annotations

from .documents import DocumentProjector, DonorTextSummary, to_document
from .errors import (
    ClusterError,
    ClusterNotAcknowledgedError,
    ConcurrentPublishError,
    IndexVerificationError,
)
from .generation import GenerationState, IndexGeneration, PublishPhase
from .manager import (
    DEFAULT_KEEP_GENERATIONS,
    PUBLISH_LOCKS,
    IndexGenerationManager,
    PublishLockRegistry,
    PublishResult,
    StalePruneFailure,
)
from .naming import IndexNamingScheme
from .schema import IndexSchema

__all__ = [
    "DEFAULT_KEEP_GENERATIONS",
    "PUBLISH_LOCKS",
    "ClusterError",
    "ClusterNotAcknowledgedError",
    "ConcurrentPublishError",
    "DocumentProjector",
    "DonorTextSummary",
    "GenerationState",
    "IndexGeneration",
    "IndexGenerationManager",
    "IndexNamingScheme",
    "IndexSchema",
    "IndexVerificationError",
    "PublishLockRegistry",
    "PublishPhase",
    "PublishResult",
    "StalePruneFailure",
    "to_document",
]
