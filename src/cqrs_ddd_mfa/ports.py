"""MFA ports (protocols).

Defines the collaborators the MFA core needs from the application:
an expiring key-value store for pending secrets, a secure random source
and a QR image encoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class TotpSetup:
    """TOTP setup data returned when enrollment starts.

    Attributes:
        secret: Base32-encoded TOTP secret.
        provisioning_uri: otpauth:// URI for QR code generation.
        manual_key: Human-readable key for manual entry.
    """

    secret: str
    provisioning_uri: str
    manual_key: str


@runtime_checkable
class IExpiringStore(Protocol):
    """Protocol for a key-value store with per-key expiry.

    Holds pending TOTP secrets between enrollment start and confirmation.
    Implementations must make ``set_with_expiry`` and ``delete`` atomic and
    raise ``MfaStoreError`` when the backend cannot be reached.
    """

    async def set_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that disappears after ``ttl_seconds``.

        Args:
            key: Store key.
            value: Value to store (overwrites any previous value).
            ttl_seconds: Time-to-live in seconds.
        """
        ...

    async def get(self, key: str) -> str | None:
        """Get a value.

        Args:
            key: Store key.

        Returns:
            The stored value, or None if absent or expired.
        """
        ...

    async def delete(self, key: str) -> None:
        """Delete a value. Deleting a missing key is not an error.

        Args:
            key: Store key.
        """
        ...


@runtime_checkable
class IRandomSource(Protocol):
    """Protocol for the random source used for secrets and backup codes.

    Production code uses ``SystemRandomSource``; tests may inject a
    deterministic implementation.
    """

    def token_bytes(self, nbytes: int) -> bytes:
        """Return ``nbytes`` random bytes."""
        ...

    def randbelow(self, exclusive_upper_bound: int) -> int:
        """Return a random int in ``[0, exclusive_upper_bound)``."""
        ...


@runtime_checkable
class IQrCodeEncoder(Protocol):
    """Protocol for rendering a provisioning URI as a QR image."""

    def render_svg(self, data: str) -> str:
        """Render ``data`` as an SVG document.

        Args:
            data: Text to encode (an otpauth:// URI).

        Returns:
            SVG markup.
        """
        ...


__all__: list[str] = [
    "TotpSetup",
    "IExpiringStore",
    "IRandomSource",
    "IQrCodeEncoder",
]
