"""Store adapters for pending MFA secrets.

``RedisExpiringStore`` needs the ``redis`` extra and is imported from
``cqrs_ddd_mfa.adapters.redis`` directly.
"""

from __future__ import annotations

from .memory import InMemoryExpiringStore

__all__: list[str] = ["InMemoryExpiringStore"]
