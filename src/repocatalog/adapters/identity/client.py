"""HTTP client for the remote identifier service."""

from __future__ import annotations

import asyncio
import threading
from logging import getLogger
from typing import TYPE_CHECKING

from repocatalog.adapters.http_resilience import ResilientClient

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from repocatalog.config import IdentityConfig, ResilienceConfig
    from repocatalog.domain.ports import IdentityKind

log = getLogger(__name__)


class IdentityServiceError(RuntimeError):
    """Raised when the identifier service cannot issue an id."""


class HttpIdentityService:
    """Issue ids through ``GET /<kind>/id?key=<business key>&create=true``.

    The service answers with the id as plain text. One event loop and one
    resilient client are opened on first use and shared by every call until
    ``close``, so the rate limit and response cache span the whole run.
    """

    def __init__(
        self,
        *,
        config: IdentityConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None
        # asyncio.Runner is not thread safe; callers may translate in parallel
        self._lock = threading.Lock()

    def __enter__(self) -> HttpIdentityService:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def ensure_id(self, kind: IdentityKind, business_key: str) -> str:
        if self._resilience.base_url is None:
            raise IdentityServiceError("Missing identifier service base_url")
        with self._lock:
            if self._runner is None:
                self._runner = asyncio.Runner()
            return self._runner.run(self._ensure_id_async(kind, business_key))

    def close(self) -> None:
        with self._lock:
            runner, client = self._runner, self._client
            self._runner = self._client = None
            if runner is None:
                return
            try:
                if client is not None:
                    runner.run(client.aclose())
            finally:
                runner.close()

    async def _ensure_id_async(self, kind: IdentityKind, business_key: str) -> str:
        if self._client is None:
            log.debug("Opening identifier service client for %s", self._resilience.base_url)
            self._client = self._client_factory(self._resilience)
        response = await self._client.get(
            f"/{kind.value}/id", params={"key": business_key, "create": "true"}
        )
        response.raise_for_status()
        issued = response.text.strip()
        if not issued:
            raise IdentityServiceError(f"Empty {kind} id issued for '{business_key}'")
        log.debug("Issued %s id %s for '%s'", kind, issued, business_key)
        return issued
