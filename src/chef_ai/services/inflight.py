"""Coalescing of identical concurrent requests."""

import asyncio
import hashlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

T = TypeVar("T")

_logger = logging.getLogger(__name__)


def fingerprint(*parts: str) -> str:
    """Return a stable SHA-256 key for request inputs."""
    digest = hashlib.sha256()
    for part in parts:
        digest.update(part.encode("utf-8"))
        digest.update(b"\x00")
    return digest.hexdigest()


@dataclass
class InFlightRegistry:
    """Lets concurrent callers with the same key share one running call.

    Keys are dropped as soon as their call finishes, so results are never
    cached; a later call with the same key runs again.
    """

    _pending: dict[str, "asyncio.Future[object]"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._pending)

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """Await the in-flight call for ``key``, starting it if needed."""
        pending = self._pending.get(key)
        if pending is None:
            pending = asyncio.ensure_future(factory())
            self._pending[key] = pending
            pending.add_done_callback(lambda _: self._pending.pop(key, None))
        else:
            _logger.debug("Joining in-flight request: key=%s", key[:12])
        return await asyncio.shield(pending)
