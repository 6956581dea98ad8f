"""Redis implementation of IExpiringStore."""

from __future__ import annotations

from typing import TYPE_CHECKING

from redis.exceptions import RedisError

from ..exceptions import MfaStoreError
from ..ports import IExpiringStore

if TYPE_CHECKING:
    from redis.asyncio import Redis


class RedisExpiringStore(IExpiringStore):
    """Pending-secret store backed by Redis.

    Uses ``SET key value EX ttl`` so the write and its expiry are atomic.
    Redis failures are raised as ``MfaStoreError``; a missing key is
    reported as None, never as an error. Failures are not logged here;
    the caller that handles the error logs it.

    Example:
        ```python
        from redis.asyncio import Redis

        store = RedisExpiringStore(Redis.from_url("redis://localhost:6379/0"))
        manager = EnrollmentManager(config, store=store)
        ```
    """

    def __init__(self, redis_client: Redis[bytes] | Redis[str]) -> None:
        """
        Initialize the store with a Redis client.

        Args:
            redis_client: Async Redis client instance.
        """
        self._redis = redis_client

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as exc:
            raise MfaStoreError(
                f"Failed to store {key}: {exc}", operation="set", key=key
            ) from exc

    async def get(self, key: str) -> str | None:
        try:
            value = await self._redis.get(key)
        except RedisError as exc:
            raise MfaStoreError(
                f"Failed to read {key}: {exc}", operation="get", key=key
            ) from exc
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else str(value)

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except RedisError as exc:
            raise MfaStoreError(
                f"Failed to delete {key}: {exc}", operation="delete", key=key
            ) from exc


__all__: list[str] = ["RedisExpiringStore"]
