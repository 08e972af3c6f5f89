"""Identifier service adapters."""

from __future__ import annotations

from .client import HttpIdentityService, IdentityServiceError
from .local import CachingIdentityService, HashIdentityService

__all__ = [
    "CachingIdentityService",
    "HashIdentityService",
    "HttpIdentityService",
    "IdentityServiceError",
]
