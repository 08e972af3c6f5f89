"""Port for the service that issues stable identifiers."""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol, runtime_checkable


class IdentityKind(StrEnum):
    FILE = "file"
    DONOR = "donor"


@runtime_checkable
class IdentityService(Protocol):
    """Map a business key to a stable surrogate id, creating it on first use."""

    def ensure_id(self, kind: IdentityKind, business_key: str) -> str: ...
