"""In-memory expiring store for development and testing.

WARNING: This implementation is NOT suitable for production use.
It stores data in memory and will NOT work with multiple workers.

Use RedisExpiringStore in production.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from ..ports import IExpiringStore

if TYPE_CHECKING:
    from collections.abc import Callable


class InMemoryExpiringStore(IExpiringStore):
    """In-memory TTL store for TESTING ONLY.

    ⚠️ WARNING: Secrets are stored in plain text in memory.
    Do NOT use in production!

    The clock is injectable so tests can move time forward past a TTL.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._entries: dict[str, tuple[str, float]] = {}

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        self._entries[key] = (value, self._clock() + ttl_seconds)

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry

        # Check expiration
        if self._clock() >= expires_at:
            del self._entries[key]
            return None

        return value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear_all(self) -> None:
        """Clear all entries.

        Useful for testing cleanup.
        """
        self._entries.clear()


__all__: list[str] = ["InMemoryExpiringStore"]
