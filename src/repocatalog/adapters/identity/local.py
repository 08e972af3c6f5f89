"""Identifier services that do not call the remote service."""

from __future__ import annotations

import hashlib
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from repocatalog.domain.ports import IdentityKind

if TYPE_CHECKING:
    from repocatalog.domain.ports import IdentityService

PREFIXES: Final[dict[IdentityKind, str]] = {
    IdentityKind.FILE: "FI",
    IdentityKind.DONOR: "DO",
}
_HASH_MODULUS: Final[int] = 10**9


class HashIdentityService:
    """Derive stable ids by hashing the business key.

    Ids look like the real ones (``FI123``, ``DO456``) but are only stable,
    not registered; they are meant for local runs and tests.
    """

    def ensure_id(self, kind: IdentityKind, business_key: str) -> str:
        digest = hashlib.sha256(f"{kind.value}:{business_key}".encode()).hexdigest()
        return f"{PREFIXES[kind]}{int(digest, 16) % _HASH_MODULUS}"


@dataclass(slots=True)
class CachingIdentityService:
    """Remember ids issued by ``delegate`` for the lifetime of the process."""

    delegate: IdentityService
    _cache: dict[tuple[IdentityKind, str], str] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def ensure_id(self, kind: IdentityKind, business_key: str) -> str:
        key = (kind, business_key)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached
        issued = self.delegate.ensure_id(kind, business_key)
        with self._lock:
            return self._cache.setdefault(key, issued)

    def __len__(self) -> int:
        return len(self._cache)
